"""
The mnemonic word encoders. Both render an address as 5 words separated by '-'.

IpPortWordEncoder (ip + port):
    The port is split into 3 metadata bits (top), 8 high data bits and 5 low data bits.
    Words 0-3: 9-bit chunk = low5[i] || ip byte i
    Word 4:    9-bit chunk = low5[4] || high8
    The dictionary id is carried by capitalizing the first letter of word i for each set bit i of the id. The
    metadata bits are reversed and carried by capitalizing the leading letters of word 4, so port 8192 (meta 001)
    becomes a capital first letter.

IpOnlyWordEncoder (ip only):
    Words 0-3 are the ip bytes used directly as indices, word 4 is the dictionary id used as an index. Decoding has
    to try every dictionary, accepting the first whose own id matches word 4.
"""
import ipaddress as IP

from ipinvite.core import WORDS, MalformedInviteError, AmbiguousOrUnknownError, UnknownDictionaryError
from ipinvite.data import BitVector, Endpoint, DictionarySet, default_dictionaries, pack4, IPLike
from ipinvite.mnemonic.casing import embed_leading_bits, read_leading_bits, embed_prefix_bits, read_prefix_bits

__all__ = ["split_words", "IpPortWordEncoder", "IpOnlyWordEncoder"]

# --- CONSTANTS --- #
IP_BYTE_COUNT = 4
BITS_PER_BYTE = 8
CHUNK_BITS = WORDS.CHUNK_BITS
ID_BITS = WORDS.ID_BITS
PORT_BITS = WORDS.PORT_BITS
META_BITS = WORDS.PORT_META_BITS
HIGH_BITS = WORDS.PORT_HIGH_BITS
LOW_BITS = WORDS.PORT_LOW_BITS
SEPARATOR = WORDS.SEPARATOR


def split_words(text: str) -> list[str]:
    words = text.split(SEPARATOR)
    if len(words) != WORDS.WORD_COUNT:
        raise MalformedInviteError(
            f"Word invite must contain {WORDS.WORD_COUNT} words separated by '{SEPARATOR}'. "
            f"Received {len(words)}: {text!r}")
    return words


class _DictionaryUser:
    """
    Holds a DictionarySet, falling back to the process-wide dictionaries on first use
    """

    def __init__(self, dictionaries: DictionarySet | None = None):
        self._dictionaries = dictionaries

    @property
    def dictionaries(self) -> DictionarySet:
        if self._dictionaries is None:
            self._dictionaries = default_dictionaries()
        return self._dictionaries

    def _dictionary(self, dictionary_id: int):
        if not 0 <= dictionary_id < WORDS.MAX_DICTIONARIES:
            raise UnknownDictionaryError(dictionary_id, len(self.dictionaries))
        return self.dictionaries.get(dictionary_id)


class IpPortWordEncoder(_DictionaryUser):

    def encode(self, endpoint: Endpoint, dictionary_id: int = 0) -> str:
        dictionary = self._dictionary(dictionary_id)

        # Port: meta (3) | high (8) | low (5)
        port_bits = BitVector.from_int(endpoint.port, PORT_BITS)
        meta = port_bits.slice(0, META_BITS)
        chunks = self._interleave(endpoint.ip.packed, port_bits)

        words = [dictionary.word(chunk.to_int()) for chunk in chunks]
        words = embed_leading_bits(words, dictionary_id, ID_BITS)
        words[-1] = embed_prefix_bits(words[-1], meta.reverse())
        return SEPARATOR.join(words)

    def decode(self, text: str) -> tuple[Endpoint, int]:
        """
        Returns the decoded endpoint and the dictionary id it was encoded with
        """
        words = split_words(text)

        dictionary_id = read_leading_bits(words, ID_BITS)
        dictionary = self._dictionary(dictionary_id)
        meta = read_prefix_bits(words[-1], META_BITS).reverse()

        chunks = [BitVector.from_int(dictionary.index(word), CHUNK_BITS) for word in words]
        ip_bytes, high, low = self._deinterleave(chunks)
        port = BitVector.concat(meta, high, low).to_int()
        return Endpoint(ip_bytes, port), dictionary_id

    @staticmethod
    def _interleave(ip_bytes: bytes, port_bits: BitVector) -> list[BitVector]:
        high = port_bits.slice(META_BITS, HIGH_BITS)
        low = port_bits.slice(META_BITS + HIGH_BITS, LOW_BITS)
        ip_chunks = BitVector.from_bytes(ip_bytes).split(BITS_PER_BYTE)

        chunks = [BitVector.concat(low.slice(i, 1), ip_chunks[i]) for i in range(IP_BYTE_COUNT)]
        chunks.append(BitVector.concat(low.slice(IP_BYTE_COUNT, 1), high))
        return chunks

    @staticmethod
    def _deinterleave(chunks: list[BitVector]) -> tuple[bytes, BitVector, BitVector]:
        low = BitVector.concat(*(chunk.slice(0, 1) for chunk in chunks))
        ip_bits = BitVector.concat(*(chunk.slice(1, BITS_PER_BYTE) for chunk in chunks[:IP_BYTE_COUNT]))
        high = chunks[IP_BYTE_COUNT].slice(1, HIGH_BITS)
        return ip_bits.to_bytes(), high, low


class IpOnlyWordEncoder(_DictionaryUser):

    def encode(self, ip: IPLike, dictionary_id: int = 0) -> str:
        dictionary = self._dictionary(dictionary_id)
        indices = list(pack4(ip)) + [dictionary_id]
        return SEPARATOR.join(dictionary.word(i) for i in indices)

    def decode(self, text: str) -> tuple[IP.IPv4Address, int]:
        words = split_words(text)

        for dictionary in self.dictionaries:
            if dictionary.find(words[-1]) != dictionary.dictionary_id:
                continue
            indices = [dictionary.find(word) for word in words[:IP_BYTE_COUNT]]
            if any(i is None or i > 0xff for i in indices):
                continue
            return IP.IPv4Address(bytes(indices)), dictionary.dictionary_id

        raise AmbiguousOrUnknownError(f"No loaded dictionary decodes {text!r} consistently")


# --- TESTING --- #
if __name__ == "__main__":
    _endpoint = Endpoint("192.168.10.1", 65535)
    _encoder = IpPortWordEncoder()
    for _id in (0, 3, 12):
        _phrase = _encoder.encode(_endpoint, _id)
        print(f"ID {_id}: {_phrase} -> {_encoder.decode(_phrase)}")
    print(f"IP ONLY: {IpOnlyWordEncoder().encode(_endpoint.ip, 5)}")
