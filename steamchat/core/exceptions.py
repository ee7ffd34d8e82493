"""
Exceptions for Steam Web API session operations.

Every failure a caller can see derives from SteamException, so a single
``except SteamException`` collapses them into "operation did not succeed"
while the subclasses keep the failure kind distinguishable.
"""
from typing import Optional


class SteamException(Exception):
    """Base exception for all steamchat errors."""

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Error string reported by the server (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class TransportError(SteamException):
    """The request could not complete or returned a non-200 status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.status = status
        super().__init__(message)


class MalformedResponseError(SteamException):
    """The response body could not be decoded into a JSON object."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        self.body = body
        super().__init__(message)


class FunctionalError(SteamException):
    """A well-formed response that explicitly signals rejection."""
    pass


class NotAuthenticatedError(SteamException):
    """Raised when an operation needs a live session and there is none."""

    def __init__(self, message: str = "Session is not authenticated") -> None:
        super().__init__(message)
