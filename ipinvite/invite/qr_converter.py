"""
Converter for the QR image container: a base64 PNG of a QR code holding the default "ip:port" text
"""
import base64
import binascii

from ipinvite.core import QR, ImageDecodeError, InviteError
from ipinvite.data import Endpoint
from ipinvite.invite.converter import InviteConverter
from ipinvite.invite.image_codec import ImageCodec, QrImageCodec
from ipinvite.invite.invite_format import InviteFormat
from ipinvite.invite.text_converters import DefaultConverter

__all__ = ["QrConverter", "decode_base64"]


def decode_base64(text: str) -> bytes | None:
    """
    Strict base64 decode, None if text isn't base64
    """
    if len(text) % 4 != 0:
        return None
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        return None


class QrConverter(InviteConverter):
    format = InviteFormat.QR_IMAGE

    def __init__(self, image_codec: ImageCodec | None = None):
        self._image_codec = image_codec
        self._content = DefaultConverter()

    @property
    def image_codec(self) -> ImageCodec:
        if self._image_codec is None:
            self._image_codec = QrImageCodec()
        return self._image_codec

    def is_format(self, invite: str) -> bool:
        if len(invite) < QR.MIN_LENGTH:
            return False
        data = decode_base64(invite)
        return data is not None and len(data) > 8 and data.startswith(QR.PNG_SIGNATURE)

    def encode(self, endpoint: Endpoint) -> str:
        image_bytes = self.image_codec.render(self._content.encode(endpoint))
        return base64.b64encode(image_bytes).decode("ascii")

    def read_content(self, invite: str) -> str:
        """
        The text held by the QR image
        """
        data = decode_base64(invite)
        if data is None:
            raise ImageDecodeError("QR invite is not valid base64")
        return self.image_codec.scan(data)

    def decode(self, invite: str) -> Endpoint:
        content = self.read_content(invite)
        if not self._content.is_format(content):
            raise ImageDecodeError(f"QR code content {content!r} is not in the expected 'ip:port' format")
        try:
            return self._content.decode(content)
        except InviteError as e:
            raise ImageDecodeError(f"QR code content {content!r} could not be decoded: {e}") from e
