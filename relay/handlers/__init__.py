from .channel import OutboundChannel
from .sessions import SessionStore

__all__ = ["OutboundChannel", "SessionStore"]
