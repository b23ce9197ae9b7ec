"""
Invite formats, their converters and the detecting registry
"""

# invite/__init__.py
from ipinvite.invite.converter import *
from ipinvite.invite.image_codec import *
from ipinvite.invite.invite_format import *
from ipinvite.invite.qr_converter import *
from ipinvite.invite.registry import *
from ipinvite.invite.text_converters import *
from ipinvite.invite.words_converter import *
