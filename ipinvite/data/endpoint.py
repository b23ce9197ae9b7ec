"""
The Endpoint class and the canonical 6-byte form every invite format is derived from

    ---------------------------------------------------------
    |   Name        | Data type | Formatted         | Size  |
    ---------------------------------------------------------
    |   ip address  | ipv4      | network byte order| 4     |
    |   port        | int       | big-endian        | 2     |
    ---------------------------------------------------------
"""
import ipaddress as IP
from dataclasses import dataclass
from io import BytesIO

from ipinvite.core import ENDPOINT, LengthError, Serializable, get_stream, read_stream, read_big_int
from ipinvite.data.ip_utils import IPLike, normalize, pack4, validate_port

__all__ = ["Endpoint", "to_canonical", "from_canonical"]


def to_canonical(ip: IPLike, port: int) -> bytes:
    """
    Big-endian concatenation of the 4 address bytes and the 2 port bytes
    """
    return pack4(ip) + validate_port(port).to_bytes(ENDPOINT.PORT_BYTES, "big")


def from_canonical(data: bytes | BytesIO) -> tuple[IP.IPv4Address, int]:
    """
    Split exactly 6 canonical bytes into (ip, port)
    """
    if isinstance(data, BytesIO):
        data = data.read()
    if len(data) != ENDPOINT.CANONICAL_BYTES:
        raise LengthError(f"Canonical endpoint must be {ENDPOINT.CANONICAL_BYTES} bytes. Received: {len(data)}")

    stream = get_stream(data)
    ip_bytes = read_stream(stream, ENDPOINT.IP_BYTES, "ip")
    port = read_big_int(stream, ENDPOINT.PORT_BYTES, "port")
    return IP.IPv4Address(ip_bytes), port


@dataclass(frozen=True)
class Endpoint(Serializable):
    """
    An immutable (IPv4, port) pair. Construction normalizes the address and fails with EndpointError if either field
    is invalid.
    """
    ip: IP.IPv4Address
    port: int

    def __post_init__(self):
        object.__setattr__(self, "ip", normalize(self.ip))
        validate_port(self.port)

    @classmethod
    def from_bytes(cls, byte_stream: bytes | BytesIO) -> "Endpoint":
        ip, port = from_canonical(byte_stream)
        return cls(ip, port)

    def to_bytes(self) -> bytes:
        return to_canonical(self.ip, self.port)

    def to_dict(self) -> dict:
        return {"ip": str(self.ip), "port": self.port}

    def __str__(self) -> str:
        return f"{self.ip}:{self.port}"
