"""Secrets configuration (env names only)."""

from __future__ import annotations

ENV_ASSEMBLYAI_API_KEY = "ASSEMBLYAI_API_KEY"
ENV_GEMINI_API_KEY = "GEMINI_API_KEY"

__all__ = ["ENV_ASSEMBLYAI_API_KEY", "ENV_GEMINI_API_KEY"]
