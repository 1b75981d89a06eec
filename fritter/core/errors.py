# fritter/core/errors.py
"""Request failures raised by policy checks and lifecycle transitions.

Every error carries the HTTP status it is rendered with and a payload that
ends up under the ``error`` key of the JSON response.
"""
from typing import Any, Dict, Union

from fastapi import status

ErrorPayload = Union[str, Dict[str, Any]]


class FritterError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, error: ErrorPayload, status_code: int = None):
        super().__init__(error if isinstance(error, str) else repr(error))
        self.error = error
        if status_code is not None:
            self.status_code = status_code


class NotFound(FritterError):
    status_code = status.HTTP_404_NOT_FOUND


class Forbidden(FritterError):
    status_code = status.HTTP_403_FORBIDDEN


class ValidationFailed(FritterError):
    status_code = status.HTTP_400_BAD_REQUEST


class PreconditionFailed(FritterError):
    status_code = status.HTTP_400_BAD_REQUEST
