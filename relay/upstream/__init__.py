from .bridge import SttBridge
from .adapter import SttUpstream
from .events import SttEvent, ProviderError, TranscriptEvent
from .interfaces import UpstreamFactory, UpstreamConnection

__all__ = [
    "ProviderError",
    "SttBridge",
    "SttEvent",
    "SttUpstream",
    "TranscriptEvent",
    "UpstreamConnection",
    "UpstreamFactory",
]
