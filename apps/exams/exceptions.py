"""Typed failures raised by the exam services.

Services raise these and let DRF's exception handler turn them into HTTP
responses; views do not catch them.
"""
from __future__ import annotations

from rest_framework import exceptions, status

NotFound = exceptions.NotFound
ValidationError = exceptions.ValidationError

INVALID_CREDENTIALS_MESSAGE = "Invalid details or already completed."


class InvalidCredentials(exceptions.APIException):
    """Login predicate failed.

    The message is the same whether the student, the code or the session state
    was wrong, so callers cannot probe which check rejected them.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = INVALID_CREDENTIALS_MESSAGE
    default_code = "invalid_credentials"


class Conflict(exceptions.APIException):
    """The operation would break a uniqueness or state invariant."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state."
    default_code = "conflict"


__all__ = [
    "Conflict",
    "INVALID_CREDENTIALS_MESSAGE",
    "InvalidCredentials",
    "NotFound",
    "ValidationError",
]
