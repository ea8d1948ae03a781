from .phase import SessionPhase
from .session import SendFn, RelaySession, AnswerSource

__all__ = ["AnswerSource", "RelaySession", "SendFn", "SessionPhase"]
