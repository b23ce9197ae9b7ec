"""
The Abstract Base Class for invite converters
"""
from abc import ABC, abstractmethod

from ipinvite.data import Endpoint
from ipinvite.invite.invite_format import InviteFormat

__all__ = ["InviteConverter"]


class InviteConverter(ABC):
    """
    A converter handles exactly one InviteFormat. is_format is a cheap heuristic; decode may still fail on text it
    recognized, and must then raise an InviteError so detection can move on to the next converter.
    """
    format: InviteFormat

    @abstractmethod
    def is_format(self, invite: str) -> bool:
        raise NotImplementedError(f"{self.__class__.__name__} must implement is_format()")

    @abstractmethod
    def encode(self, endpoint: Endpoint) -> str:
        raise NotImplementedError(f"{self.__class__.__name__} must implement encode()")

    @abstractmethod
    def decode(self, invite: str) -> Endpoint:
        raise NotImplementedError(f"{self.__class__.__name__} must implement decode()")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(format={self.format.value})"
