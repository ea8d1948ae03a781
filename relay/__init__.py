"""Realtime transcription relay: client audio -> streaming STT -> transcript -> answer."""

__all__: list[str] = []
