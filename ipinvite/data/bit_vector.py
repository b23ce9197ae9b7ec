"""
The BitVector class: a fixed-width, immutable sequence of bits in MSB-first order.

The mnemonic codec only ever needs a handful of primitives - build from an integer or from big-endian bytes,
concatenate, slice, reverse and read back as an integer or bytes. Every primitive is exact-width: values that don't
fit, ranges that run off the end and conversions that would lose bits all raise BitVectorError.
"""
from typing import Iterable, Iterator

from ipinvite.core import BitVectorError

__all__ = ["BitVector"]

MAX_INT_BITS = 32


class BitVector:
    __slots__ = ("_value", "_width")

    def __init__(self, bits: Iterable[int | bool] = ()):
        """
        Build from an iterable of bits, first element is the most significant
        """
        value = 0
        width = 0
        for bit in bits:
            value = (value << 1) | (1 if bit else 0)
            width += 1
        self._value = value
        self._width = width

    @classmethod
    def _raw(cls, value: int, width: int) -> "BitVector":
        vector = cls.__new__(cls)
        vector._value = value
        vector._width = width
        return vector

    # --- Construction --- #

    @classmethod
    def from_int(cls, value: int, width: int) -> "BitVector":
        if width < 0:
            raise BitVectorError(f"Bit width must be non-negative. Received: {width}")
        if value < 0 or value >= (1 << width):
            raise BitVectorError(f"Value {value} does not fit in {width} bits")
        return cls._raw(value, width)

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitVector":
        return cls._raw(int.from_bytes(data, "big"), len(data) * 8)

    @classmethod
    def concat(cls, *vectors: "BitVector") -> "BitVector":
        value = 0
        width = 0
        for vector in vectors:
            value = (value << vector._width) | vector._value
            width += vector._width
        return cls._raw(value, width)

    # --- Manipulation --- #

    def slice(self, offset: int, length: int) -> "BitVector":
        """
        Return bits [offset, offset + length)
        """
        if offset < 0 or length < 0 or offset + length > self._width:
            raise BitVectorError(f"Range [{offset}, {offset + length}) out of bounds for {self._width} bits")
        shift = self._width - offset - length
        return self._raw((self._value >> shift) & ((1 << length) - 1), length)

    def split(self, size: int) -> list["BitVector"]:
        """
        Split into consecutive chunks of the given size. The last chunk may be shorter.
        """
        if size <= 0:
            raise BitVectorError(f"Chunk size must be positive. Received: {size}")
        return [self.slice(i, min(size, self._width - i)) for i in range(0, self._width, size)]

    def reverse(self) -> "BitVector":
        return BitVector(reversed(list(self)))

    # --- Conversion --- #

    def to_int(self) -> int:
        if self._width > MAX_INT_BITS:
            raise BitVectorError(f"BitVector of {self._width} bits is too wide to convert to an integer")
        return self._value

    def to_bytes(self) -> bytes:
        if self._width % 8 != 0:
            raise BitVectorError(f"BitVector of {self._width} bits is not a whole number of bytes")
        return self._value.to_bytes(self._width // 8, "big")

    # --- Dunder --- #

    def __len__(self) -> int:
        return self._width

    def __getitem__(self, index: int) -> int:
        if index < 0:
            index += self._width
        if not 0 <= index < self._width:
            raise IndexError(f"Bit index {index} out of range for {self._width} bits")
        return (self._value >> (self._width - 1 - index)) & 1

    def __iter__(self) -> Iterator[int]:
        for i in range(self._width):
            yield (self._value >> (self._width - 1 - i)) & 1

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self._width == other._width and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._value, self._width))

    def __str__(self) -> str:
        return format(self._value, f"0{self._width}b") if self._width else ""

    def __repr__(self) -> str:
        return f"BitVector('{self}')"
