"""Observability helpers.

Structured JSON logging, in-process metrics, request-scoped context and the
ASGI middleware that ties them to each HTTP request.
"""

__all__ = [
    "middleware",
    "metrics",
    "logger",
    "context",
]
