"""Answer generation with a hard timeout."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Protocol

from relay.messages.server import Error, Answer
from relay.errors import GenerationError, GenerationTimeoutError
from relay.config.generation import (
    FAILURE_ERROR_MESSAGE,
    TIMEOUT_ERROR_MESSAGE,
    DEFAULT_GENERATION_TIMEOUT_S,
)

from .prompt import build_prompt

logger = logging.getLogger(__name__)


class AnswerProvider(Protocol):
    async def generate(self, prompt: str) -> str: ...


def _discard_late_result(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("late generation failure discarded: %s", exc)
        return
    logger.info("late generation result discarded after timeout (%d chars)", len(task.result() or ""))


class AnswerGenerator:
    """Turn transcript text into exactly one `Answer` or `Error`.

    On timeout the provider call is left running (there is no cancellation
    API to rely on); its eventual result is dropped, never delivered.
    """

    def __init__(self, provider: AnswerProvider, *, timeout_s: float = DEFAULT_GENERATION_TIMEOUT_S) -> None:
        self._provider = provider
        self._timeout_s = float(timeout_s)

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    async def _call_with_timeout(self, prompt: str) -> str:
        task = asyncio.create_task(self._provider.generate(prompt))
        try:
            done, _pending = await asyncio.wait({task}, timeout=self._timeout_s)
        except asyncio.CancelledError:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            raise
        if task not in done:
            task.add_done_callback(_discard_late_result)
            raise GenerationTimeoutError(f"no answer within {self._timeout_s:.1f}s")
        return task.result()

    async def generate(self, transcript: str) -> Answer | Error:
        prompt = build_prompt(transcript)
        started = time.perf_counter()
        try:
            text = await self._call_with_timeout(prompt)
        except GenerationTimeoutError as exc:
            logger.warning("answer generation timed out: %s", exc)
            return Error(message=TIMEOUT_ERROR_MESSAGE)
        except GenerationError as exc:
            logger.warning("answer generation failed: %s", exc)
            return Error(message=f"{FAILURE_ERROR_MESSAGE}: {exc}")
        logger.info("answer generated in %.0fms (%d chars)", (time.perf_counter() - started) * 1000.0, len(text))
        return Answer(text=text)


__all__ = ["AnswerGenerator", "AnswerProvider"]
