"""
Network collaborators: public IP discovery and the reachability demo
"""

# network/__init__.py
from ipinvite.network.stun import *
from ipinvite.network.transport import *
