"""
Canonical IP helpers for ipinvite.
Invites only ever carry IPv4; everything is normalized to IPv4Address at the edges.
"""

from __future__ import annotations

import ipaddress as _ip

from ipinvite.core import EndpointError, ENDPOINT

__all__ = ["normalize", "pack4", "validate_port", "IPLike"]

IPLike = str | bytes | int | _ip.IPv4Address


def normalize(ip: IPLike) -> _ip.IPv4Address:
    """
    Return an IPv4Address.
    Accepts str/bytes/int/IPv4Address. IPv6 input (other than v4-mapped) is rejected.
    """
    # Fast paths for objects
    if isinstance(ip, _ip.IPv4Address):
        return ip
    if isinstance(ip, _ip.IPv6Address):
        if ip.ipv4_mapped:
            return ip.ipv4_mapped
        raise EndpointError(f"IPv6 addresses are not supported: {ip}")

    # Bytes -> recurse
    if isinstance(ip, (bytes, bytearray, memoryview)):
        b = bytes(ip)
        if len(b) != ENDPOINT.IP_BYTES:
            raise EndpointError(f"IP bytes must be length {ENDPOINT.IP_BYTES}. Received: {len(b)}")
        return _ip.IPv4Address(b)

    # bool is an int subclass but never a valid address
    if isinstance(ip, int) and not isinstance(ip, bool):
        try:
            return _ip.IPv4Address(ip)
        except _ip.AddressValueError as e:
            raise EndpointError(str(e)) from e

    # Strings -> recurse
    if isinstance(ip, str):
        try:
            obj = _ip.ip_address(ip.strip())
        except ValueError as e:
            raise EndpointError(f"Invalid IP address: {ip!r}") from e
        return normalize(obj)

    raise EndpointError(f"Unsupported IP input type: {type(ip)}")


def pack4(ip: IPLike) -> bytes:
    """4-byte network-order representation."""
    return normalize(ip).packed


def validate_port(port: int) -> int:
    if isinstance(port, bool) or not isinstance(port, int):
        raise EndpointError(f"Port must be an integer. Received: {type(port)}")
    if not 0 <= port <= ENDPOINT.MAX_PORT:
        raise EndpointError(f"Port {port} outside 0-{ENDPOINT.MAX_PORT}")
    return port
