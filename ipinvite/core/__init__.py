"""
Contains the core elements that are used within ipinvite

Core:
    -Provides the reference formats and configuration constants
    -Provides custom exceptions for the invite codec
    -Provides byte stream helpers and the Serializable protocol
"""
# core/__init__.py
from ipinvite.core.byte_stream import *
from ipinvite.core.exceptions import *
from ipinvite.core.formats import *
from ipinvite.core.serializable import *
