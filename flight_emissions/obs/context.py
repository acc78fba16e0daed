"""Request context helpers using ContextVars.

``request_id`` is set per HTTP request by the middleware; ``pipeline`` names
the emissions pipeline (past/future) serving the current submission.
"""

from contextvars import ContextVar
from typing import Optional


# Public ContextVars (names are stable API)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
pipeline_var: ContextVar[Optional[str]] = ContextVar("pipeline", default=None)

