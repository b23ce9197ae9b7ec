"""
Test utilities
"""
import base64
import ipaddress as IP
from itertools import product
from pathlib import Path
from random import choice, randint
from secrets import randbits

from ipinvite.core import QR, WORDS, ImageDecodeError
from ipinvite.data import Endpoint
from ipinvite.invite import ImageCodec


# --- RANDOM --- #
def random_ip() -> IP.IPv4Address:
    return IP.IPv4Address(randbits(32))


def random_port() -> int:
    return randbits(16)


def random_endpoint() -> Endpoint:
    return Endpoint(random_ip(), random_port())


def random_dictionary_id() -> int:
    return randint(0, WORDS.MAX_DICTIONARIES - 1)


def random_ascii(max_length: int = 40, alphabet: str | None = None) -> str:
    alphabet = alphabet or "".join(chr(c) for c in range(0x20, 0x7f))
    return "".join(choice(alphabet) for _ in range(randint(0, max_length)))


# --- WORDLISTS --- #
LETTERS = "abcdefgh"
ALL_WORDS = ["".join(p) for p in product(LETTERS, repeat=3)]  # 512 unique 3-letter words


def rotated_words(offset: int = 0) -> list[str]:
    """
    All 512 test words rotated by offset, so word(i) of list k is ALL_WORDS[(i + k) % 512]
    """
    offset %= len(ALL_WORDS)
    return ALL_WORDS[offset:] + ALL_WORDS[:offset]


def write_wordlist(directory: Path, dictionary_id: int, words: list[str]) -> Path:
    path = directory / WORDS.FILE_TEMPLATE.format(dictionary_id)
    path.write_text("\n".join(words) + "\n", encoding="utf-8")
    return path


# --- IMAGES --- #
class FakeImageCodec(ImageCodec):
    """
    Stores the text after a PNG signature and pads it so the base64 is long enough to be recognized
    """
    MAGIC = QR.PNG_SIGNATURE + b"\r\n\x1a\n" + b"FAKE"

    def render(self, text: str) -> bytes:
        data = text.encode("utf-8")
        return self.MAGIC + len(data).to_bytes(2, "big") + data + bytes(QR.MIN_LENGTH)

    def scan(self, data: bytes) -> str:
        if not data.startswith(self.MAGIC):
            raise ImageDecodeError("No code found")
        size = int.from_bytes(data[len(self.MAGIC):len(self.MAGIC) + 2], "big")
        start = len(self.MAGIC) + 2
        return data[start:start + size].decode("utf-8")


def qr_invite(codec: ImageCodec, text: str) -> str:
    """A QR invite holding arbitrary text"""
    return base64.b64encode(codec.render(text)).decode("ascii")
