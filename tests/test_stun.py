"""
Tests for STUN public address discovery, against hand-built responses and a loopback server
"""
import ipaddress as IP
import socket
import threading

import pytest

from ipinvite.core import STUN, StunError
from ipinvite.data import Endpoint
from ipinvite.network import build_binding_request, parse_binding_response, get_public_endpoint, get_public_ip

TRANSACTION_ID = bytes(range(12))


def _attribute(attr_type: int, value: bytes) -> bytes:
    padding = bytes((4 - len(value) % 4) % 4)
    return attr_type.to_bytes(2, "big") + len(value).to_bytes(2, "big") + value + padding


def _address(endpoint: Endpoint, xor: bool, family: int = STUN.FAMILY_IPV4) -> bytes:
    port = endpoint.port ^ (STUN.MAGIC_COOKIE >> 16) if xor else endpoint.port
    address = int(endpoint.ip) ^ STUN.MAGIC_COOKIE if xor else int(endpoint.ip)
    return b"\x00" + family.to_bytes(1, "big") + port.to_bytes(2, "big") + address.to_bytes(4, "big")


def _response(*attributes: bytes, message_type: int = STUN.BINDING_SUCCESS,
              transaction_id: bytes = TRANSACTION_ID) -> bytes:
    body = b"".join(attributes)
    return (message_type.to_bytes(2, "big") + len(body).to_bytes(2, "big") + STUN.MAGIC_COOKIE.to_bytes(4, "big") +
            transaction_id + body)


def test_binding_request():
    request = build_binding_request(TRANSACTION_ID)
    assert len(request) == STUN.HEADER_BYTES
    assert request[:2] == b"\x00\x01"
    assert request[2:4] == b"\x00\x00"
    assert request[4:8] == bytes.fromhex("2112a442")
    assert request[8:] == TRANSACTION_ID

    with pytest.raises(ValueError):
        build_binding_request(b"short")


def test_xor_mapped_address():
    endpoint = Endpoint("203.0.113.7", 54321)
    data = _response(_attribute(0x8022, b"test!"), _attribute(STUN.XOR_MAPPED_ADDRESS, _address(endpoint, True)))
    assert parse_binding_response(data, TRANSACTION_ID) == endpoint


def test_mapped_address_fallback():
    endpoint = Endpoint("198.51.100.1", 3478)
    data = _response(_attribute(STUN.MAPPED_ADDRESS, _address(endpoint, False)))
    assert parse_binding_response(data, TRANSACTION_ID) == endpoint

    # IPv6 XOR-MAPPED is ignored in favour of an IPv4 MAPPED address
    ipv6 = b"\x00\x02" + bytes(18)
    data = _response(_attribute(STUN.XOR_MAPPED_ADDRESS, ipv6), _attribute(STUN.MAPPED_ADDRESS, _address(endpoint, False)))
    assert parse_binding_response(data, TRANSACTION_ID) == endpoint


def test_xor_preferred():
    mapped = Endpoint("10.0.0.1", 1)
    xor_mapped = Endpoint("203.0.113.7", 2)
    data = _response(_attribute(STUN.MAPPED_ADDRESS, _address(mapped, False)),
                     _attribute(STUN.XOR_MAPPED_ADDRESS, _address(xor_mapped, True)))
    assert parse_binding_response(data, TRANSACTION_ID) == xor_mapped


def test_invalid_responses():
    endpoint = Endpoint("203.0.113.7", 54321)
    attribute = _attribute(STUN.XOR_MAPPED_ADDRESS, _address(endpoint, True))

    bad = [
        _response(attribute, message_type=0x0111),
        _response(attribute, transaction_id=bytes(12)),
        _response(),
        _response(attribute)[:-4],
        b"\x01\x01",
    ]
    for data in bad:
        with pytest.raises(StunError):
            parse_binding_response(data, TRANSACTION_ID)


def _serve_once(sock: socket.socket, endpoint: Endpoint):
    request, addr = sock.recvfrom(2048)
    transaction_id = request[8:20]
    attribute = _attribute(STUN.XOR_MAPPED_ADDRESS, _address(endpoint, True))
    sock.sendto(_response(attribute, transaction_id=transaction_id), addr)


def test_get_public_ip_loopback():
    endpoint = Endpoint("203.0.113.7", 40000)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as server:
        server.bind(("127.0.0.1", 0))
        server.settimeout(5)
        thread = threading.Thread(target=_serve_once, args=(server, endpoint), daemon=True)
        thread.start()

        assert get_public_ip("127.0.0.1", server.getsockname()[1], timeout=5) == IP.IPv4Address("203.0.113.7")
        thread.join(5)


def test_get_public_endpoint_timeout():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as silent:
        silent.bind(("127.0.0.1", 0))
        with pytest.raises(StunError):
            get_public_endpoint("127.0.0.1", silent.getsockname()[1], timeout=0.2)
