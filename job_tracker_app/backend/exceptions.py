"""
Error taxonomy shared by the services and rendered by the API layer.
"""
from fastapi import status


class JobTrackerError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JobTrackerError):
    """Missing or malformed fields, empty update payloads, bad paging."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(JobTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(JobTrackerError):
    """Raised for every mutation while the tracker is read-only."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(JobTrackerError):
    status_code = status.HTTP_404_NOT_FOUND


class TransientStoreError(JobTrackerError):
    """The backing store failed; the request was not applied."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
