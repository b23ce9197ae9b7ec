"""
The closed set of invite formats
"""
from enum import Enum

__all__ = ["InviteFormat"]


class InviteFormat(Enum):
    DEFAULT = "default"  # 192.168.10.1:65535
    BASE16 = "base16"  # C0A80A01FFFF
    BASE62 = "base62"  # at most 9 characters of [0-9a-zA-Z]
    WORDS = "words"  # five words, letter case carries metadata
    QR_IMAGE = "qr"  # base64 PNG of a QR code holding the default form
    UNKNOWN = "unknown"  # only ever produced by detection

    @classmethod
    def from_name(cls, name: str) -> "InviteFormat":
        """
        Case-insensitive lookup by value or member name
        """
        key = name.strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown invite format: {name!r}")
