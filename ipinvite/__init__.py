"""
ipinvite: share a reachable IPv4 endpoint as a short, auto-detectable invite

Formats:
    -default    "ip:port"
    -base16     12 hex digits of the canonical 6 bytes
    -base62     the canonical 6 bytes as a base-62 number
    -words      five dictionary words, with the dictionary id and high port bits carried by letter case
    -qr         a base64 PNG of a QR code holding the default text
"""
from ipinvite.core import InviteError
from ipinvite.data import Endpoint
from ipinvite.invite import InviteFormat, InviteRegistry, DecodeResult, default_registry, encode, decode

__version__ = "0.1.0"

__all__ = ["Endpoint", "InviteFormat", "InviteRegistry", "DecodeResult", "InviteError", "default_registry", "encode",
           "decode", "__version__"]
