"""
Tests for the QR image codec backed by qrcode and zxing-cpp
"""
from io import BytesIO

import pytest
from PIL import Image

from ipinvite.core import QR, ImageDecodeError
from ipinvite.data import Endpoint
from ipinvite.invite import InviteFormat, InviteRegistry, QrConverter, QrImageCodec
from tests.utility import random_endpoint


@pytest.fixture(scope="module")
def codec():
    return QrImageCodec()


def test_render_and_scan(codec):
    image_bytes = codec.render("127.0.0.1:50000")
    assert image_bytes.startswith(QR.PNG_SIGNATURE)
    assert codec.scan(image_bytes) == "127.0.0.1:50000"


@pytest.mark.parametrize("level", ["L", "M", "Q", "H", "q"])
def test_error_correction_levels(level):
    codec = QrImageCodec(error_correction=level)
    assert codec.scan(codec.render("10.0.0.1:1")) == "10.0.0.1:1"


def test_unknown_error_correction():
    with pytest.raises(ValueError):
        QrImageCodec(error_correction="X")


def test_scan_without_code(codec):
    blank = BytesIO()
    Image.new("L", (100, 100), color=255).save(blank, format="PNG")
    with pytest.raises(ImageDecodeError):
        codec.scan(blank.getvalue())

    with pytest.raises(ImageDecodeError):
        codec.scan(QR.PNG_SIGNATURE + b"garbage")


def test_qr_invite_round_trip(codec):
    converter = QrConverter(codec)
    registry = InviteRegistry()
    for endpoint in (Endpoint("0.0.0.0", 0), Endpoint("255.255.255.255", 65535), random_endpoint()):
        invite = converter.encode(endpoint)
        assert len(invite) >= QR.MIN_LENGTH
        assert converter.is_format(invite)
        assert converter.decode(invite) == endpoint
        assert registry.detect(invite) == (InviteFormat.DEFAULT, endpoint)
