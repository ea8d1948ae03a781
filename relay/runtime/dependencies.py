"""Runtime dependency construction (STT bridge, answer generator, admission control)."""

from __future__ import annotations

import logging

import httpx

from relay.state import RuntimeDeps
from relay.upstream.bridge import SttBridge
from relay.state.settings import AppSettings
from relay.handlers.sessions import SessionStore
from relay.generation import GeminiClient, AnswerGenerator
from relay.config.generation import GENERATION_HTTP_TIMEOUT_S, GENERATION_HTTP_CONNECT_TIMEOUT_S

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(GENERATION_HTTP_TIMEOUT_S, connect=GENERATION_HTTP_CONNECT_TIMEOUT_S),
    )


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    http_client = build_http_client()
    gemini = GeminiClient(
        http_client=http_client,
        api_key=settings.auth.gemini_api_key,
        model=settings.generation.model,
        api_base_url=settings.generation.api_base_url,
    )
    stt_bridge = SttBridge(settings=settings.stt, api_key=settings.auth.assemblyai_api_key)

    logger.info(
        "runtime: stt=%s model=%s max_sessions=%d",
        settings.stt.streaming_url,
        settings.generation.model,
        settings.limits.max_concurrent_sessions,
    )
    return RuntimeDeps(
        sessions=SessionStore(max_sessions=settings.limits.max_concurrent_sessions),
        stt_bridge=stt_bridge,
        answer_generator=AnswerGenerator(gemini, timeout_s=settings.generation.timeout_s),
        settings=settings,
        http_client=http_client,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps", "build_http_client"]
