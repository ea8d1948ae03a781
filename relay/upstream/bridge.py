"""Factory for per-session speech-to-text connections."""

from __future__ import annotations

from urllib.parse import urlencode

from relay.state.settings import SttSettings

from .adapter import SttUpstream


def build_streaming_url(settings: SttSettings) -> str:
    query = urlencode({
        "sample_rate": settings.sample_rate_hz,
        "format_turns": "true" if settings.format_turns else "false",
    })
    separator = "&" if "?" in settings.streaming_url else "?"
    return f"{settings.streaming_url}{separator}{query}"


class SttBridge:
    def __init__(self, *, settings: SttSettings, api_key: str) -> None:
        self._settings = settings
        self._api_key = api_key
        self._url = build_streaming_url(settings)

    @property
    def url(self) -> str:
        return self._url

    def new_connection(self) -> SttUpstream:
        return SttUpstream(
            url=self._url,
            api_key=self._api_key,
            format_turns=self._settings.format_turns,
            connect_timeout_s=self._settings.connect_timeout_s,
        )


__all__ = ["SttBridge", "build_streaming_url"]
