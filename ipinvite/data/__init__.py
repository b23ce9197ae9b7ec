"""
All methods for manipulating and representing data in ipinvite
"""

# data/__init__.py
from ipinvite.data.bit_vector import *
from ipinvite.data.endpoint import *
from ipinvite.data.ip_utils import *
from ipinvite.data.wordlist import *
