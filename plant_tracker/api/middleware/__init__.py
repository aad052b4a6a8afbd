"""HTTP middleware shared by every API version."""

from .logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
