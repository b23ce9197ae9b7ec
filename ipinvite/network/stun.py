"""
Public IPv4 discovery with a single STUN binding request (RFC 5389)

    Binding request header
    -----------------------------------------------------------------
    |   Name            | Data type | Formatted             | Size  |
    -----------------------------------------------------------------
    |   message type    | int       | big-endian            | 2     |
    |   message length  | int       | big-endian            | 2     |
    |   magic cookie    | int       | big-endian            | 4     |
    |   transaction id  | bytes     | random                | 12    |
    -----------------------------------------------------------------
"""
import ipaddress as IP
import secrets
import socket
from io import BytesIO

from ipinvite.core import STUN, StunError, ReadError, get_stream, read_stream, read_big_int
from ipinvite.core.logging import get_logger
from ipinvite.data import Endpoint

__all__ = ["build_binding_request", "parse_binding_response", "get_public_endpoint", "get_public_ip"]

logger = get_logger(__name__)


def build_binding_request(transaction_id: bytes) -> bytes:
    if len(transaction_id) != STUN.TRANSACTION_ID_BYTES:
        raise ValueError(f"Transaction id must be {STUN.TRANSACTION_ID_BYTES} bytes")
    return (STUN.BINDING_REQUEST.to_bytes(2, "big") + (0).to_bytes(2, "big") +
            STUN.MAGIC_COOKIE.to_bytes(4, "big") + transaction_id)


def _read_address(value: bytes, xor: bool) -> Endpoint | None:
    stream = get_stream(value)
    read_stream(stream, 1, "reserved")
    family = read_big_int(stream, 1, "family")
    port = read_big_int(stream, 2, "port")
    if family != STUN.FAMILY_IPV4:
        return None
    address = read_big_int(stream, 4, "address")
    if xor:
        port ^= STUN.MAGIC_COOKIE >> 16
        address ^= STUN.MAGIC_COOKIE
    return Endpoint(IP.IPv4Address(address), port)


def parse_binding_response(data: bytes, transaction_id: bytes) -> Endpoint:
    """
    Return the mapped endpoint from a binding success response. XOR-MAPPED-ADDRESS is preferred over MAPPED-ADDRESS.
    """
    try:
        stream = get_stream(data)
        message_type = read_big_int(stream, 2, "message type")
        length = read_big_int(stream, 2, "message length")
        cookie = read_big_int(stream, 4, "magic cookie")
        received_id = read_stream(stream, STUN.TRANSACTION_ID_BYTES, "transaction id")

        if message_type != STUN.BINDING_SUCCESS:
            raise StunError(f"Unexpected STUN message type: {message_type:#06x}")
        if cookie != STUN.MAGIC_COOKIE or received_id != transaction_id:
            raise StunError("STUN response does not match the request")

        mapped = None
        attributes = BytesIO(read_stream(stream, length, "attributes"))
        while attributes.tell() < length:
            attr_type = read_big_int(attributes, 2, "attribute type")
            attr_length = read_big_int(attributes, 2, "attribute length")
            value = read_stream(attributes, attr_length, "attribute value")
            read_stream(attributes, (4 - attr_length % 4) % 4, "attribute padding")

            if attr_type == STUN.XOR_MAPPED_ADDRESS:
                endpoint = _read_address(value, xor=True)
                if endpoint is not None:
                    return endpoint
            elif attr_type == STUN.MAPPED_ADDRESS and mapped is None:
                mapped = _read_address(value, xor=False)
    except ReadError as e:
        raise StunError(f"Truncated STUN response: {e}") from e

    if mapped is None:
        raise StunError("STUN response carries no IPv4 mapped address")
    return mapped


def get_public_endpoint(server: str = STUN.SERVER, port: int = STUN.PORT,
                        timeout: float = STUN.TIMEOUT) -> Endpoint:
    """
    The address and port this host is seen from by the STUN server
    """
    transaction_id = secrets.token_bytes(STUN.TRANSACTION_ID_BYTES)
    request = build_binding_request(transaction_id)

    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(timeout)
        try:
            logger.debug(f"Sending STUN binding request to {server}:{port}")
            sock.sendto(request, (server, port))
            data, _ = sock.recvfrom(STUN.RECV_BYTES)
        except socket.timeout as e:
            raise StunError(f"No STUN response from {server}:{port} within {timeout}s") from e
        except OSError as e:
            raise StunError(f"STUN request to {server}:{port} failed: {e}") from e

    endpoint = parse_binding_response(data, transaction_id)
    logger.info(f"Public endpoint reported by {server}: {endpoint}")
    return endpoint


def get_public_ip(server: str = STUN.SERVER, port: int = STUN.PORT, timeout: float = STUN.TIMEOUT) -> IP.IPv4Address:
    return get_public_endpoint(server, port, timeout).ip
