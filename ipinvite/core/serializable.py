"""
The Serializable ABC: values with a canonical byte form, readable from and writable to bytes, hex and JSON
"""
import json
from abc import ABC, abstractmethod
from io import BytesIO

__all__ = ["Serializable"]


class Serializable(ABC):

    @classmethod
    @abstractmethod
    def from_bytes(cls, byte_stream: bytes | BytesIO):
        """Build an instance from its canonical bytes"""
        raise NotImplementedError(f"{cls.__name__} must implement from_bytes()")

    @abstractmethod
    def to_bytes(self) -> bytes:
        raise NotImplementedError(f"{self.__class__.__name__} must implement to_bytes()")

    @abstractmethod
    def to_dict(self) -> dict:
        raise NotImplementedError(f"{self.__class__.__name__} must implement to_dict()")

    @classmethod
    def from_hex(cls, hex_string: str):
        """Raises ValueError if hex_string isn't hex"""
        return cls.from_bytes(bytes.fromhex(hex_string))

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    @property
    def length(self) -> int:
        return len(self.to_bytes())

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
