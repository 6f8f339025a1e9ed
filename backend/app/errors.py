"""Typed error taxonomy shared by services and routers.

Services raise these; ``app.main`` renders them as JSON with the status
code attached to each class.
"""
from fastapi import status


class SlotSwapperError(Exception):
    """Base class for every domain failure surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SlotSwapperError):
    """Malformed input or a lifecycle rule violation (wrong status, bad times)."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(SlotSwapperError):
    """Missing, malformed or expired bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(SlotSwapperError):
    """Actor does not own the resource or is not the addressed party."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(SlotSwapperError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(SlotSwapperError):
    """Duplicate pending negotiation or a concurrent write to the same rows."""

    # Duplicate requests are reported as a plain bad request to clients.
    status_code = status.HTTP_400_BAD_REQUEST
