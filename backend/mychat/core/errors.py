"""
Application errors.

Services raise these; the handlers registered in main.py turn them into
JSON responses of the form {"detail": "..."}.
"""
from typing import List, Optional

from fastapi import status


class AppError(Exception):
    """Base exception class for application errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")


class InvalidArgumentError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class ValidationError(AppError):
    """Field constraint violations, or a write rejected by the store."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "; ".join(self.errors) or "Validation error")
