"""Inactivity-based promotion of provisional transcript text."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from relay.config.transcript import PROVISIONAL_PROMOTION_TIMEOUT_S

from .reconciler import TranscriptReconciler

logger = logging.getLogger(__name__)


class InactivityPromoter:
    """Promote the provisional fragment if no update arrives within `timeout_s`.

    Guards against a provider that never finalizes a trailing utterance.
    Call `touch()` after each provisional update and `cancel()` when a final
    event lands.
    """

    def __init__(
        self,
        reconciler: TranscriptReconciler,
        *,
        timeout_s: float = PROVISIONAL_PROMOTION_TIMEOUT_S,
        on_promote: Callable[[], None] | None = None,
    ) -> None:
        self._reconciler = reconciler
        self._timeout_s = float(timeout_s)
        self._on_promote = on_promote
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def touch(self) -> None:
        self.cancel()
        self._task = asyncio.create_task(self._promote_later())

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def aclose(self) -> None:
        task = self._task
        self.cancel()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _promote_later(self) -> None:
        await asyncio.sleep(self._timeout_s)
        if self._reconciler.promote():
            logger.debug("provisional transcript promoted after %.1fs of inactivity", self._timeout_s)
            if self._on_promote is not None:
                self._on_promote()


__all__ = ["InactivityPromoter"]
