"""HTTP middleware."""

from member_discipline.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
