"""
The mnemonic word codecs and the letter-case metadata channel they share
"""

# mnemonic/__init__.py
from ipinvite.mnemonic.casing import *
from ipinvite.mnemonic.word_encoder import *
