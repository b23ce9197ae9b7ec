"""
Letter case as a metadata channel.

Words are always emitted in lower case; a bit is carried by upper-casing one specific character. apply_case and
read_case are the two halves of that mapping, everything else here is built on them.
"""
from ipinvite.data import BitVector

__all__ = ["apply_case", "read_case", "embed_leading_bits", "read_leading_bits", "embed_prefix_bits",
           "read_prefix_bits"]


def apply_case(word: str, index: int) -> str:
    """
    Upper-case the character at index. Out of range indices leave the word unchanged.
    """
    if not 0 <= index < len(word):
        return word
    return word[:index] + word[index].upper() + word[index + 1:]


def read_case(word: str, index: int) -> int:
    """
    1 if the character at index is upper case, 0 otherwise (including out of range)
    """
    return int(0 <= index < len(word) and word[index].isupper())


# --- First letter of consecutive words --- #

def embed_leading_bits(words: list[str], value: int, width: int) -> list[str]:
    """
    Bit i of value (least significant first) capitalizes the first letter of word i
    """
    return [apply_case(w, 0) if i < width and (value >> i) & 1 else w for i, w in enumerate(words)]


def read_leading_bits(words: list[str], width: int) -> int:
    return sum(read_case(w, 0) << i for i, w in enumerate(words[:width]))


# --- Leading letters of a single word --- #

def embed_prefix_bits(word: str, bits: BitVector) -> str:
    """
    bits[i] capitalizes character i of the word
    """
    for i, bit in enumerate(bits):
        if bit:
            word = apply_case(word, i)
    return word


def read_prefix_bits(word: str, width: int) -> BitVector:
    return BitVector(read_case(word, i) for i in range(width))
