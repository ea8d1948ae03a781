from .prompt import build_prompt
from .client import GeminiClient
from .adapter import AnswerGenerator, AnswerProvider

__all__ = ["AnswerGenerator", "AnswerProvider", "GeminiClient", "build_prompt"]
