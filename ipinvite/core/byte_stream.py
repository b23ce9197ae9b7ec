"""
Exact-length reads over byte streams. Short reads raise ReadError naming the field being read.
"""
from io import BytesIO
from typing import Optional, Union

from ipinvite.core.exceptions import ReadError

__all__ = ["SERIALIZED", "get_stream", "read_stream", "read_big_int"]

SERIALIZED = Union[bytes, bytearray, memoryview, BytesIO]


def get_stream(byte_stream: SERIALIZED) -> BytesIO:
    """Wrap bytes-like data in a BytesIO; a BytesIO is returned as is"""
    if isinstance(byte_stream, BytesIO):
        return byte_stream
    if isinstance(byte_stream, (bytes, bytearray, memoryview)):
        return BytesIO(bytes(byte_stream))
    raise TypeError(f"Expected bytes or BytesIO but received: {type(byte_stream)}")


def read_stream(stream: BytesIO, length: int, field: Optional[str] = None) -> bytes:
    data = stream.read(length)
    if len(data) != length:
        where = f" reading {field}" if field else ""
        raise ReadError(f"Insufficient data{where}: expected {length} bytes, got {len(data)}")
    return data


def read_big_int(stream: BytesIO, length: int, field: Optional[str] = None) -> int:
    """Unsigned big-endian integer of the given byte length"""
    return int.from_bytes(read_stream(stream, length, field), "big")
