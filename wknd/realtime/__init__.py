"""
Realtime Chat Module

Websocket hub used by the site's live chat widget. Chat messages are
broadcast to every connected client followed by a delayed admin
acknowledgement; sponsor inquiries get a private receipt.
"""

from .router import router
from .hub import BroadcastHub

__all__ = ["router", "BroadcastHub"]
