"""Scoped logging context.

Fields pushed here (``run_id``, ``job``, ``phase``...) are attached to every
log record emitted inside the scope by ``ContextualFilter``. Storage is a
``ContextVar`` so worker threads started from a copied context see the fields
of the run that spawned them.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_LOG_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar("anagrams_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields active in the current context."""
    return dict(_LOG_CONTEXT.get())


def push_log_context(**fields: Any) -> Token:
    """Merge ``fields`` into the active context.

    Returns:
        Token to hand back to pop_log_context()
    """
    return _LOG_CONTEXT.set({**_LOG_CONTEXT.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before the matching push."""
    _LOG_CONTEXT.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly useful in tests."""
    _LOG_CONTEXT.set({})


class log_context:
    """Context manager form of push/pop.

    Example:
        >>> with log_context(run_id="3f2a", phase="compute"):
        ...     logger.info("Running job")  # carries run_id and phase
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
