"""Answer generation settings (env names, defaults and prompt text)."""

from __future__ import annotations

ENV_GEMINI_MODEL = "GEMINI_MODEL"
ENV_GEMINI_API_BASE_URL = "GEMINI_API_BASE_URL"
ENV_GENERATION_TIMEOUT_S = "GENERATION_TIMEOUT_S"

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-lite"
DEFAULT_GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GENERATION_TIMEOUT_S = 15.0

# Transport-level bound on the provider request itself. Longer than the answer
# timeout: a request that outlives it finishes in the background and is dropped.
GENERATION_HTTP_TIMEOUT_S = 60.0
GENERATION_HTTP_CONNECT_TIMEOUT_S = 10.0

# Sampling parameters are fixed; they are not exposed through the environment.
GENERATION_TEMPERATURE = 0.7
GENERATION_TOP_P = 0.8
GENERATION_TOP_K = 40
GENERATION_MAX_OUTPUT_TOKENS = 1000

NO_TRANSCRIPT_NOTICE = "No transcript available to analyze."
TIMEOUT_ERROR_MESSAGE = "Request timed out. Please try again."
FAILURE_ERROR_MESSAGE = "Failed to generate answer"

PROMPT_TEMPLATE = """# System Role
You are a confident, articulate interview assistant.

# Task Specification
Generate professional, natural-sounding answers to interview questions.
Adjust the length and depth based on the question type.

# Input
{transcript}

# Output
A concise, professional answer to the interview question.
Answer ONLY in bullet points for clarity and quick pointers."""

__all__ = [
    "DEFAULT_GEMINI_API_BASE_URL",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_GENERATION_TIMEOUT_S",
    "ENV_GEMINI_API_BASE_URL",
    "ENV_GEMINI_MODEL",
    "ENV_GENERATION_TIMEOUT_S",
    "FAILURE_ERROR_MESSAGE",
    "GENERATION_HTTP_CONNECT_TIMEOUT_S",
    "GENERATION_HTTP_TIMEOUT_S",
    "GENERATION_MAX_OUTPUT_TOKENS",
    "GENERATION_TEMPERATURE",
    "GENERATION_TOP_K",
    "GENERATION_TOP_P",
    "NO_TRANSCRIPT_NOTICE",
    "PROMPT_TEMPLATE",
    "TIMEOUT_ERROR_MESSAGE",
]
