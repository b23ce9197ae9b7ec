"""
The ipinvite reference formats and configuration constants
"""
import os
from typing import Final

__all__ = ["ENDPOINT", "WORDS", "BASE62", "QR", "STUN", "NETWORK", "CONFIG"]


class ENDPOINT:
    """
    Byte sizes of the canonical (ip, port) form
    """
    IP_BYTES: Final[int] = 4
    PORT_BYTES: Final[int] = 2
    CANONICAL_BYTES: Final[int] = 6
    MAX_PORT: Final[int] = 0xffff


class WORDS:
    """
    Mnemonic word codec layout. A 9-bit chunk selects one of 512 words; 4 bits of dictionary id ride on the first
    letter of words 0-3 and the 3 high port bits ride on the leading letters of the last word.
    """
    CHUNK_BITS: Final[int] = 9
    ID_BITS: Final[int] = 4
    PORT_BITS: Final[int] = 16
    PORT_META_BITS: Final[int] = 3
    PORT_DATA_BITS: Final[int] = PORT_BITS - PORT_META_BITS  # 13
    PORT_HIGH_BITS: Final[int] = 8
    PORT_LOW_BITS: Final[int] = 5
    WORD_COUNT: Final[int] = 5
    DICTIONARY_SIZE: Final[int] = 1 << CHUNK_BITS  # 512
    MAX_DICTIONARIES: Final[int] = 1 << ID_BITS  # 16
    SEPARATOR: Final[str] = "-"
    RESOURCE_PACKAGE: Final[str] = "ipinvite.data.wordlists"
    FILE_TEMPLATE: Final[str] = "words_{}.txt"


class BASE62:
    ALPHABET: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class QR:
    """
    QR container settings
    """
    MIN_LENGTH: Final[int] = 100  # base64 chars
    PNG_SIGNATURE: Final[bytes] = b"\x89PNG"
    ERROR_CORRECTION: Final[str] = "Q"
    BOX_SIZE: Final[int] = 5
    BORDER: Final[int] = 4


class STUN:
    SERVER: Final[str] = "stun.l.google.com"
    PORT: Final[int] = 19302
    TIMEOUT: Final[float] = 5.0
    MAGIC_COOKIE: Final[int] = 0x2112A442
    BINDING_REQUEST: Final[int] = 0x0001
    BINDING_SUCCESS: Final[int] = 0x0101
    MAPPED_ADDRESS: Final[int] = 0x0001
    XOR_MAPPED_ADDRESS: Final[int] = 0x0020
    HEADER_BYTES: Final[int] = 20
    TRANSACTION_ID_BYTES: Final[int] = 12
    FAMILY_IPV4: Final[int] = 0x01
    RECV_BYTES: Final[int] = 2048


class NETWORK:
    DEFAULT_PORT: Final[int] = 60000
    CONNECT_TIMEOUT: Final[float] = 5.0
    ACCEPT_POLL: Final[float] = 0.5
    DEFAULT_MESSAGE: Final[str] = "Hello from the client!"
    PROBE_ADDRESS: Final[tuple] = ("8.8.8.8", 80)


class CONFIG:
    """
    Settings read from the environment at import time
    """
    WORDLIST_DIR: Final[str | None] = os.environ.get("IPINVITE_WORDLIST_DIR") or None
    LOG_LEVEL: Final[str] = os.environ.get("IPINVITE_LOG_LEVEL", "WARNING")
