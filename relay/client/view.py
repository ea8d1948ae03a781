"""Terminal rendering of relay server messages."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable

from relay.transcript import InactivityPromoter, TranscriptReconciler
from relay.config.transcript import PROVISIONAL_PROMOTION_TIMEOUT_S
from relay.config.websocket import (
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_TYPE_ERROR,
    WS_KEY_MESSAGE,
    WS_TYPE_ANSWER,
    WS_KEY_IS_FINAL,
    WS_TYPE_STARTED,
    WS_TYPE_STOPPED,
    WS_TYPE_TRANSCRIPT,
)

logger = logging.getLogger(__name__)


class TranscriptView:
    """Keeps the client-side transcript and writes updates through `write`.

    Provisional text is promoted after a quiet period so a trailing utterance
    the provider never finalizes still ends up in the stable transcript.
    """

    def __init__(
        self,
        *,
        write: Callable[[str], None] = print,
        promotion_timeout_s: float = PROVISIONAL_PROMOTION_TIMEOUT_S,
    ) -> None:
        self._write = write
        self.reconciler = TranscriptReconciler()
        self.answers: list[str] = []
        self.errors: list[str] = []
        self._promoter = InactivityPromoter(
            self.reconciler,
            timeout_s=promotion_timeout_s,
            on_promote=self._redraw,
        )

    def _redraw(self) -> None:
        self._write(self.reconciler.render())

    def handle(self, message: dict[str, Any]) -> None:
        msg_type = message.get(WS_KEY_TYPE)
        if msg_type == WS_TYPE_TRANSCRIPT:
            self._on_transcript(str(message.get(WS_KEY_TEXT) or ""), bool(message.get(WS_KEY_IS_FINAL)))
        elif msg_type == WS_TYPE_ANSWER:
            text = str(message.get(WS_KEY_TEXT) or "")
            self.answers.append(text)
            self._write(f"\n--- answer ---\n{text}\n--------------")
        elif msg_type == WS_TYPE_ERROR:
            text = str(message.get(WS_KEY_MESSAGE) or "")
            self.errors.append(text)
            self._write(f"[error] {text}")
        elif msg_type in (WS_TYPE_STARTED, WS_TYPE_STOPPED):
            self._write(f"[{msg_type}]")
        else:
            logger.debug("ignoring server message: %r", message)

    def _on_transcript(self, text: str, is_final: bool) -> None:
        if not text.strip():
            return
        if is_final:
            self._promoter.cancel()
            self.reconciler.commit(text)
        else:
            self.reconciler.update_provisional(text)
            self._promoter.touch()
        self._redraw()

    def promote_pending(self) -> str:
        """Promote any provisional text now and return the full transcript."""
        self._promoter.cancel()
        if self.reconciler.promote():
            self._redraw()
        return self.reconciler.stable

    async def aclose(self) -> None:
        await self._promoter.aclose()


__all__ = ["TranscriptView"]
