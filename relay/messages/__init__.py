from .client import (
    StopMessage,
    AudioMessage,
    StartMessage,
    ClientMessage,
    GenerateMessage,
)
from .server import (
    Answer,
    Error,
    Started,
    Stopped,
    Transcript,
    ServerMessage,
    encode_server_message,
)

__all__ = [
    "Answer",
    "AudioMessage",
    "ClientMessage",
    "Error",
    "GenerateMessage",
    "ServerMessage",
    "StartMessage",
    "Started",
    "StopMessage",
    "Stopped",
    "Transcript",
    "encode_server_message",
]
