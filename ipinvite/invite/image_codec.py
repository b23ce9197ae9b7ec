"""
The QR image collaborator: text -> PNG bytes and PNG bytes -> text.

QrConverter only depends on the ImageCodec interface; QrImageCodec is the default implementation, rendering with
qrcode/Pillow and scanning with zxing-cpp.
"""
from abc import ABC, abstractmethod
from io import BytesIO

import qrcode
import zxingcpp
from PIL import Image, UnidentifiedImageError
from qrcode.constants import ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q, ERROR_CORRECT_H

from ipinvite.core import QR, ImageDecodeError
from ipinvite.core.logging import get_logger

__all__ = ["ImageCodec", "QrImageCodec"]

logger = get_logger(__name__)

ERROR_CORRECTION = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


class ImageCodec(ABC):

    @abstractmethod
    def render(self, text: str) -> bytes:
        """Return image bytes holding the UTF-8 text"""
        raise NotImplementedError(f"{self.__class__.__name__} must implement render()")

    @abstractmethod
    def scan(self, data: bytes) -> str:
        """Return the text held by the image. Raises ImageDecodeError if no code is found."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement scan()")


class QrImageCodec(ImageCodec):

    def __init__(self, error_correction: str = QR.ERROR_CORRECTION, box_size: int = QR.BOX_SIZE,
                 border: int = QR.BORDER):
        try:
            self.error_correction = ERROR_CORRECTION[error_correction.upper()]
        except KeyError:
            raise ValueError(f"Unknown QR error correction level: {error_correction!r}") from None
        self.box_size = box_size
        self.border = border

    def render(self, text: str) -> bytes:
        qr = qrcode.QRCode(error_correction=self.error_correction, box_size=self.box_size, border=self.border)
        qr.add_data(text)
        qr.make(fit=True)

        buffer = BytesIO()
        qr.make_image(fill_color="black", back_color="white").save(buffer)
        return buffer.getvalue()

    def scan(self, data: bytes) -> str:
        try:
            with Image.open(BytesIO(data)) as image:
                barcodes = zxingcpp.read_barcodes(image.convert("L"))
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageDecodeError(f"Unable to open QR image: {e}") from e

        for barcode in barcodes:
            if barcode.text:
                logger.debug(f"Scanned {barcode.format} with text {barcode.text!r}")
                return barcode.text

        raise ImageDecodeError("No QR code could be read from the supplied image")
