"""Provider event vocabulary and its translation into relay events."""

from __future__ import annotations

import logging
from typing import Any
from dataclasses import dataclass

import orjson

from relay.config.stt import STT_MSG_TURN, STT_MSG_BEGIN, STT_MSG_TERMINATION

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TranscriptEvent:
    text: str
    is_final: bool


@dataclass(frozen=True, slots=True)
class ProviderError:
    message: str


SttEvent = TranscriptEvent | ProviderError


def _turn_is_final(message: dict[str, Any], *, format_turns: bool) -> bool:
    if bool(message.get("turn_is_formatted")):
        return True
    # Unformatted sessions never set turn_is_formatted; end_of_turn closes the turn instead.
    return not format_turns and bool(message.get("end_of_turn"))


def translate_provider_message(raw: str | bytes, *, format_turns: bool) -> SttEvent | None:
    """Map one provider frame to a relay event.

    Session lifecycle frames (Begin/Termination) are logged and yield None, as do
    unknown frame types. Raises ValueError for frames that are not JSON objects.
    """
    try:
        message = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid provider frame: {exc}") from exc
    if not isinstance(message, dict):
        raise ValueError("provider frame must be a JSON object")

    error = message.get("error")
    if isinstance(error, str) and error.strip():
        return ProviderError(message=error.strip())

    msg_type = message.get("type")
    if msg_type == STT_MSG_BEGIN:
        logger.info("stt session began: id=%s expires_at=%s", message.get("id"), message.get("expires_at"))
        return None
    if msg_type == STT_MSG_TURN:
        text = message.get("transcript") or ""
        if not isinstance(text, str) or not text:
            return None
        return TranscriptEvent(text=text, is_final=_turn_is_final(message, format_turns=format_turns))
    if msg_type == STT_MSG_TERMINATION:
        logger.info(
            "stt session terminated: audio=%ss session=%ss",
            message.get("audio_duration_seconds"),
            message.get("session_duration_seconds"),
        )
        return None

    logger.debug("ignoring stt frame type=%r", msg_type)
    return None


__all__ = ["ProviderError", "SttEvent", "TranscriptEvent", "translate_provider_message"]
