"""
Fixtures used in the tests
"""
import pytest

from ipinvite.data import load_dictionaries
from ipinvite.invite import (InviteRegistry, QrConverter, DefaultConverter, WordsConverter, Base16Converter,
                             Base62Converter)
from tests.utility import FakeImageCodec, rotated_words, write_wordlist


@pytest.fixture()
def wordlist_dir(tmp_path):
    """
    A directory holding words_0.txt and words_1.txt, the second rotated by one word
    """
    for dictionary_id in (0, 1):
        write_wordlist(tmp_path, dictionary_id, rotated_words(dictionary_id))
    return tmp_path


@pytest.fixture()
def small_dictionaries(wordlist_dir):
    return load_dictionaries(wordlist_dir, resource_package=None)


@pytest.fixture()
def fake_codec():
    return FakeImageCodec()


@pytest.fixture()
def registry(fake_codec):
    """
    The default converter order with the QR images faked
    """
    return InviteRegistry([
        QrConverter(fake_codec),
        DefaultConverter(),
        WordsConverter(),
        Base16Converter(),
        Base62Converter(),
    ])
