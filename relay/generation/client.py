"""Gemini `generateContent` client over httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import orjson

from relay.errors import GenerationError
from relay.config.generation import (
    GENERATION_TOP_K,
    GENERATION_TOP_P,
    GENERATION_TEMPERATURE,
    GENERATION_MAX_OUTPUT_TOKENS,
)

logger = logging.getLogger(__name__)


def build_request_body(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": GENERATION_TEMPERATURE,
            "topP": GENERATION_TOP_P,
            "topK": GENERATION_TOP_K,
            "maxOutputTokens": GENERATION_MAX_OUTPUT_TOKENS,
        },
    }


def _error_reason(response: httpx.Response) -> str:
    try:
        payload = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return response.reason_phrase or "unknown error"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return response.reason_phrase or "unknown error"


def extract_text(payload: Any) -> str:
    if not isinstance(payload, dict):
        raise GenerationError("malformed response body")

    candidates = payload.get("candidates") or []
    if not candidates:
        feedback = payload.get("promptFeedback") or {}
        block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        raise GenerationError(f"no candidates returned (blockReason={block_reason})")

    first = candidates[0] if isinstance(candidates[0], dict) else {}
    parts = (first.get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise GenerationError(f"empty answer (finishReason={first.get('finishReason')})")
    return text


class GeminiClient:
    """Single non-streaming generation request per call."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        api_key: str,
        model: str,
        api_base_url: str,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._url = f"{api_base_url.rstrip('/')}/models/{model}:generateContent"

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._http.post(
                self._url,
                content=orjson.dumps(build_request_body(prompt)),
                headers={"content-type": "application/json", "x-goog-api-key": self._api_key},
            )
        except httpx.HTTPError as exc:
            raise GenerationError(f"request failed: {exc.__class__.__name__}: {exc}") from exc

        if response.is_error:
            raise GenerationError(f"status {response.status_code}: {_error_reason(response)}")

        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError as exc:
            raise GenerationError("response is not valid JSON") from exc
        return extract_text(payload)


__all__ = ["GeminiClient", "build_request_body", "extract_text"]
