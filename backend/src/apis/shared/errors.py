"""Shared error models and utilities for consistent error handling across APIs"""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Standard error codes for service failures"""

    # Client errors
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION_ERROR = "validation_error"
    FORBIDDEN = "forbidden"

    # Server errors
    INTERNAL_ERROR = "internal_error"
    SERVICE_UNAVAILABLE = "service_unavailable"


class ServiceError(Exception):
    """
    Raised by service collaborators when an operation fails.

    The message is human readable (usually an already-resolved label) and may
    be shown to console users by handlers that surface error detail.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        detail: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.detail = detail

    def __str__(self) -> str:
        return self.message
