"""
The InviteRegistry: encodes an endpoint in a chosen format and detects the format of an arbitrary invite.

Converters are held in a fixed priority order so overlapping alphabets resolve predictably:

    1. QR image  - base64 PNG signature, the most distinctive
    2. Default   - strict "ip:port" regex
    3. Words     - 5 parts separated by '-'
    4. Base16    - exactly 12 hex digits
    5. Base62    - loosest, anything in [0-9a-zA-Z]

Detection tries each converter whose is_format matches; if its decode raises, the heuristic was a false positive and
the next converter is tried. A QR container is opened first and its content detected in its place.
"""
import threading
from typing import Iterable, NamedTuple, Optional

from ipinvite.core import InviteError, ImageDecodeError, UnsupportedFormatError
from ipinvite.core.logging import get_logger
from ipinvite.data import Endpoint
from ipinvite.invite.converter import InviteConverter
from ipinvite.invite.invite_format import InviteFormat
from ipinvite.invite.qr_converter import QrConverter
from ipinvite.invite.text_converters import DefaultConverter, Base16Converter, Base62Converter
from ipinvite.invite.words_converter import WordsConverter

__all__ = ["DecodeResult", "InviteRegistry", "default_converters", "default_registry", "encode", "decode"]

logger = get_logger(__name__)


class DecodeResult(NamedTuple):
    format: InviteFormat
    endpoint: Optional[Endpoint]

    @property
    def ok(self) -> bool:
        return self.format is not InviteFormat.UNKNOWN


UNKNOWN = DecodeResult(InviteFormat.UNKNOWN, None)


def default_converters() -> list[InviteConverter]:
    return [
        QrConverter(),
        DefaultConverter(),
        WordsConverter(),
        Base16Converter(),
        Base62Converter(),
    ]


class InviteRegistry:

    def __init__(self, converters: Iterable[InviteConverter] | None = None):
        self._converters = tuple(converters) if converters is not None else tuple(default_converters())

    @property
    def converters(self) -> tuple[InviteConverter, ...]:
        return self._converters

    @property
    def formats(self) -> list[InviteFormat]:
        return [c.format for c in self._converters]

    def converter(self, invite_format: InviteFormat) -> InviteConverter:
        for converter in self._converters:
            if converter.format is invite_format:
                return converter
        raise UnsupportedFormatError(f"No converter registered for format: {invite_format.value}")

    # --- Encoding --- #

    def encode(self, endpoint: Endpoint, invite_format: InviteFormat, dictionary_id: int = 0) -> str:
        converter = self.converter(invite_format)
        if isinstance(converter, WordsConverter):
            return converter.encode(endpoint, dictionary_id)
        return converter.encode(endpoint)

    def encode_all(self, endpoint: Endpoint, dictionary_id: int = 0) -> dict[InviteFormat, str]:
        return {c.format: self.encode(endpoint, c.format, dictionary_id) for c in self._converters}

    # --- Detection --- #

    def detect(self, invite: str) -> DecodeResult:
        """
        Return the detected format and decoded endpoint, or (UNKNOWN, None)
        """
        invite = invite.strip()

        # Containers are opened and their content detected instead
        for converter in self._converters:
            if isinstance(converter, QrConverter) and converter.is_format(invite):
                content = converter.read_content(invite)
                result = self._detect_text(content.strip())
                if not result.ok:
                    raise ImageDecodeError(f"QR code content {content!r} is not a recognised invite")
                return result

        return self._detect_text(invite)

    def _detect_text(self, invite: str) -> DecodeResult:
        for converter in self._converters:
            if isinstance(converter, QrConverter) or not converter.is_format(invite):
                continue
            try:
                return DecodeResult(converter.format, converter.decode(invite))
            except InviteError as e:
                logger.debug(f"{converter.format.value} recognised {invite!r} but failed to decode: {e}")
        return UNKNOWN


# --- Process-wide registry --- #

_default_lock = threading.Lock()
_default: Optional[InviteRegistry] = None


def default_registry() -> InviteRegistry:
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = InviteRegistry()
    return _default


def encode(endpoint: Endpoint, invite_format: InviteFormat, dictionary_id: int = 0) -> str:
    return default_registry().encode(endpoint, invite_format, dictionary_id)


def decode(invite: str) -> DecodeResult:
    return default_registry().detect(invite)
