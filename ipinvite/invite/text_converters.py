"""
Converters for the plain text invite formats: "ip:port", Base16 and Base62 over the canonical 6 bytes
"""
import re

from ipinvite.core import BASE62, ENDPOINT, EndpointError, LengthError, MalformedInviteError
from ipinvite.core.logging import get_logger
from ipinvite.data import Endpoint, normalize, validate_port
from ipinvite.invite.converter import InviteConverter
from ipinvite.invite.invite_format import InviteFormat

__all__ = ["DefaultConverter", "Base16Converter", "Base62Converter"]

logger = get_logger(__name__)


class DefaultConverter(InviteConverter):
    """
    "ip:port", e.g. "127.0.0.1:50000"
    """
    format = InviteFormat.DEFAULT
    FORMAT_RE = re.compile(r"(\d{1,3}(?:\.\d{1,3}){3}):(\d{1,5})", re.ASCII)

    def is_format(self, invite: str) -> bool:
        match = self.FORMAT_RE.fullmatch(invite)
        if not match:
            return False
        try:
            normalize(match.group(1))
            validate_port(int(match.group(2)))
        except EndpointError:
            return False
        return True

    def encode(self, endpoint: Endpoint) -> str:
        return f"{endpoint.ip}:{endpoint.port}"

    def decode(self, invite: str) -> Endpoint:
        match = self.FORMAT_RE.fullmatch(invite)
        if not match:
            raise MalformedInviteError(f"Expected 'ip:port'. Received: {invite!r}")
        return Endpoint(match.group(1), int(match.group(2)))


class Base16Converter(InviteConverter):
    """
    Upper-case hex of the canonical bytes, e.g. "7F000001C350"
    """
    format = InviteFormat.BASE16
    HEX_LENGTH = ENDPOINT.CANONICAL_BYTES * 2
    FORMAT_RE = re.compile(r"[0-9A-Fa-f]+")

    def is_format(self, invite: str) -> bool:
        return len(invite) == self.HEX_LENGTH and self.FORMAT_RE.fullmatch(invite) is not None

    def encode(self, endpoint: Endpoint) -> str:
        return endpoint.to_hex().upper()

    def decode(self, invite: str) -> Endpoint:
        try:
            return Endpoint.from_hex(invite)
        except ValueError as e:
            raise MalformedInviteError(f"Invalid hex invite {invite!r}: {e}") from e


class Base62Converter(InviteConverter):
    """
    The canonical bytes read as a big-endian unsigned integer, written in base 62 with digits [0-9a-zA-Z]
    """
    format = InviteFormat.BASE62
    ALPHABET = BASE62.ALPHABET

    def is_format(self, invite: str) -> bool:
        return bool(invite) and all(char in self.ALPHABET for char in invite)

    def encode(self, endpoint: Endpoint) -> str:
        # Setup
        base = len(self.ALPHABET)
        n = int.from_bytes(endpoint.to_bytes(), "big")
        if n == 0:
            return self.ALPHABET[0]

        # Encode into Base62
        encoded_string = ""
        while n > 0:
            n, temp_index = divmod(n, base)
            encoded_string = self.ALPHABET[temp_index] + encoded_string
        return encoded_string

    def decode(self, invite: str) -> Endpoint:
        if not self.is_format(invite):
            raise MalformedInviteError(f"Invalid Base62 invite: {invite!r}")

        base = len(self.ALPHABET)
        total = 0
        for char in invite:
            total = total * base + self.ALPHABET.index(char)

        # Left-pad to the canonical width; anything wider is not an endpoint
        if total.bit_length() > ENDPOINT.CANONICAL_BYTES * 8:
            raise LengthError(f"Base62 invite {invite!r} decodes to more than {ENDPOINT.CANONICAL_BYTES} bytes")
        logger.debug(f"Base62: {invite} -> Integer: {total}")
        return Endpoint.from_bytes(total.to_bytes(ENDPOINT.CANONICAL_BYTES, "big"))
