"""API middleware."""

from fieldstock.api.middleware.error_handler import ErrorHandlerMiddleware
from fieldstock.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
