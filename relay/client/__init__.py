"""Command-line microphone client for the relay."""

from .view import TranscriptView
from .relay_client import RelayClient, build_ws_url, encode_client_message

__all__ = ["RelayClient", "TranscriptView", "build_ws_url", "encode_client_message"]
