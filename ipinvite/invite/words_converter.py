"""
Converter for the 5-word mnemonic format
"""
import ipaddress as IP

from ipinvite.core import WORDS
from ipinvite.data import DictionarySet, Endpoint, IPLike
from ipinvite.invite.converter import InviteConverter
from ipinvite.invite.invite_format import InviteFormat
from ipinvite.mnemonic import IpPortWordEncoder, IpOnlyWordEncoder

__all__ = ["WordsConverter"]


class WordsConverter(InviteConverter):
    """
    Owns the dictionaries for both word encoders. They are loaded on first encode/decode, so a missing word list only
    breaks this format.
    """
    format = InviteFormat.WORDS

    def __init__(self, dictionaries: DictionarySet | None = None):
        self._with_port = IpPortWordEncoder(dictionaries)
        self._without_port = IpOnlyWordEncoder(dictionaries)

    @property
    def dictionaries(self) -> DictionarySet:
        return self._with_port.dictionaries

    def is_format(self, invite: str) -> bool:
        if not invite or invite.isspace():
            return False
        return len(invite.split(WORDS.SEPARATOR)) == WORDS.WORD_COUNT

    def encode(self, endpoint: Endpoint, dictionary_id: int = 0) -> str:
        return self._with_port.encode(endpoint, dictionary_id)

    def decode(self, invite: str) -> Endpoint:
        endpoint, _ = self._with_port.decode(invite)
        return endpoint

    def decode_with_id(self, invite: str) -> tuple[Endpoint, int]:
        return self._with_port.decode(invite)

    # --- IP only --- #

    def encode_address(self, ip: IPLike, dictionary_id: int = 0) -> str:
        return self._without_port.encode(ip, dictionary_id)

    def decode_address(self, invite: str) -> tuple[IP.IPv4Address, int]:
        return self._without_port.decode(invite)
