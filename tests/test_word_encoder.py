"""
Tests for the ip + port mnemonic word encoder
"""
import pytest

from ipinvite.core import MalformedInviteError, UnknownDictionaryError, WordNotFoundError
from ipinvite.data import Endpoint, default_dictionaries
from ipinvite.invite import WordsConverter
from ipinvite.mnemonic import IpPortWordEncoder, split_words
from tests.utility import random_endpoint, random_dictionary_id

BOUNDARY_ENDPOINTS = [Endpoint("0.0.0.0", 0), Endpoint("255.255.255.255", 65535)]


@pytest.fixture(scope="module")
def encoder():
    return IpPortWordEncoder()


def test_round_trip(encoder):
    for _ in range(200):
        endpoint = random_endpoint()
        dictionary_id = random_dictionary_id()
        phrase = encoder.encode(endpoint, dictionary_id)
        assert len(split_words(phrase)) == 5
        assert encoder.decode(phrase) == (endpoint, dictionary_id), f"Failed to decode {phrase}"


@pytest.mark.parametrize("endpoint", BOUNDARY_ENDPOINTS)
def test_boundaries(encoder, endpoint):
    for dictionary_id in range(16):
        assert encoder.decode(encoder.encode(endpoint, dictionary_id)) == (endpoint, dictionary_id)


def test_known_layout(encoder):
    """
    Port metadata bits are reversed onto the leading letters of the last word
    """
    first = default_dictionaries().get(0).word(0)
    assert encoder.encode(Endpoint("0.0.0.0", 0)) == "-".join([first] * 5)

    # meta = 001 -> reversed 100 -> first letter
    assert encoder.encode(Endpoint("0.0.0.0", 8192)).split("-")[-1] == first[0].upper() + first[1:]

    # meta = 111 -> first three letters
    assert encoder.encode(Endpoint("0.0.0.0", 0xe000)).split("-")[-1] == first[:3].upper() + first[3:]


def test_port_interleaving(encoder):
    """
    Each of the 5 low port bits leads one chunk; the high 8 port bits fill the last chunk
    """
    dictionary = default_dictionaries().get(0)

    # low5 = 00001 -> chunk 4 = 1 || 00000000
    words = encoder.encode(Endpoint("0.0.0.0", 1)).split("-")
    assert words[4] == dictionary.word(256)
    assert words[:4] == [dictionary.word(0)] * 4

    # low5 = 10000 -> chunk 0 = 1 || ip byte 0
    words = encoder.encode(Endpoint("7.0.0.0", 0b10000)).split("-")
    assert words[0] == dictionary.word(256 + 7)

    # high8 = 0x01 -> chunk 4 = 0 || 00000001
    words = encoder.encode(Endpoint("0.0.0.0", 0b100000)).split("-")
    assert words[4] == dictionary.word(1)


def test_dictionary_id_casing(encoder):
    """
    Ids 3 and 12 capitalize different words and decode back to their own id
    """
    endpoint = random_endpoint()
    phrase_3 = encoder.encode(endpoint, 3)
    phrase_12 = encoder.encode(endpoint, 12)

    assert [w[0].isupper() for w in phrase_3.split("-")[:4]] == [True, True, False, False]
    assert [w[0].isupper() for w in phrase_12.split("-")[:4]] == [False, False, True, True]
    assert encoder.decode(phrase_3) == (endpoint, 3)
    assert encoder.decode(phrase_12) == (endpoint, 12)


def test_decode_ignores_other_casing(encoder):
    endpoint = random_endpoint()
    words = encoder.encode(endpoint, 5).split("-")
    shouted = [w[0] + w[1:].upper() for w in words[:4]] + [words[4][:3] + words[4][3:].upper()]
    assert encoder.decode("-".join(shouted)) == (endpoint, 5)


def test_malformed():
    converter = WordsConverter()
    for text in ("a-b-c-d", "a-b-c-d-e-f", "abcde", ""):
        with pytest.raises(MalformedInviteError):
            converter.decode(text)


def test_word_not_found():
    converter = WordsConverter()
    phrase = converter.encode(random_endpoint()).split("-")
    phrase[2] = "zzzzz"
    with pytest.raises(WordNotFoundError) as exc_info:
        converter.decode("-".join(phrase))
    assert exc_info.value.word == "zzzzz"
    assert "zzzzz" in str(exc_info.value)


def test_unknown_dictionary(encoder, small_dictionaries):
    with pytest.raises(UnknownDictionaryError):
        encoder.encode(random_endpoint(), 16)
    with pytest.raises(UnknownDictionaryError):
        encoder.encode(random_endpoint(), -1)

    # Only ids 0 and 1 are loaded; a capital third word means id 4
    small = IpPortWordEncoder(small_dictionaries)
    words = small.encode(random_endpoint(), 0).split("-")
    words[2] = words[2].capitalize()
    with pytest.raises(UnknownDictionaryError):
        small.decode("-".join(words))


def test_custom_dictionaries(small_dictionaries):
    encoder = IpPortWordEncoder(small_dictionaries)
    endpoint = random_endpoint()
    for dictionary_id in (0, 1):
        assert encoder.decode(encoder.encode(endpoint, dictionary_id)) == (endpoint, dictionary_id)
