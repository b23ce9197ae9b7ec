"""
The custom exceptions used throughout ipinvite
"""
__all__ = ["InviteError", "LengthError", "ReadError", "EndpointError", "BitVectorError", "MalformedInviteError",
           "WordNotFoundError", "UnknownDictionaryError", "AmbiguousOrUnknownError", "NoDictionaryError",
           "UnsupportedFormatError", "ImageDecodeError", "StunError"]


class InviteError(Exception):
    """
    Parent class for every error raised by the invite codec
    """
    pass


class LengthError(InviteError):
    """
    For canonical bytes which are not exactly 6 bytes long
    """
    pass


class ReadError(InviteError):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass


class EndpointError(InviteError):
    """
    For an address that is not IPv4 or a port outside 0-65535
    """
    pass


class BitVectorError(InviteError):
    """
    For use in the BitVector class: widths, offsets and values out of bounds
    """
    pass


class MalformedInviteError(InviteError):
    """
    For invites with the wrong number of words or the wrong separator
    """
    pass


class WordNotFoundError(InviteError):
    """
    Raised when a word is not in the dictionary being used for decoding
    """

    def __init__(self, word: str, dictionary_id: int | None = None):
        self.word = word
        self.dictionary_id = dictionary_id
        where = f"dictionary {dictionary_id}" if dictionary_id is not None else "any loaded dictionary"
        super().__init__(f"Word '{word}' not found in {where}")


class UnknownDictionaryError(InviteError):
    """
    Raised when a dictionary id is outside the loaded range
    """

    def __init__(self, dictionary_id: int, loaded: int = 0):
        self.dictionary_id = dictionary_id
        self.loaded = loaded
        super().__init__(f"Invalid dictionary id: {dictionary_id}. Loaded dictionaries: {loaded}")


class AmbiguousOrUnknownError(InviteError):
    """
    For IP-only word invites that no loaded dictionary decodes consistently
    """
    pass


class NoDictionaryError(InviteError):
    """
    Raised when zero word lists could be loaded
    """
    pass


class UnsupportedFormatError(InviteError):
    """
    For encode requests naming a format with no registered converter
    """
    pass


class ImageDecodeError(InviteError):
    """
    For QR images that can't be opened, contain no code, or contain an unreadable invite
    """
    pass


class StunError(InviteError):
    """
    Raised when the STUN server gives no usable mapped address
    """
    pass
