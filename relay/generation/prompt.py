"""Prompt construction for answer generation."""

from __future__ import annotations

from relay.config.generation import PROMPT_TEMPLATE


def build_prompt(transcript: str) -> str:
    return PROMPT_TEMPLATE.format(transcript=transcript.strip())


__all__ = ["build_prompt"]
