"""
Session state.

Contains the mutable state shared by the authenticator, the sequenced
requester and the poll loop.
"""
from dataclasses import dataclass
from typing import Optional

from ..exceptions import NotAuthenticatedError


@dataclass
class Session:
    """
    State of one logged-in Steam web presence session.

    The session is live once login has assigned a queue handle. Only the
    authenticator writes identity, queue_handle and access_token; the
    sequence cursor is advanced by outbound actions and reset by polls.
    Instances are not thread-safe: callers driving one session from
    several tasks must serialize access themselves.

    Attributes:
        identity: SteamID of the logged-in user
        queue_handle: Message queue id (umqid) assigned at login
        sequence: Message cursor shared by sends and polls
        access_token: OAuth token used for every call
    """
    identity: Optional[str] = None
    queue_handle: Optional[str] = None
    sequence: int = 0
    access_token: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.queue_handle is not None

    def require_live(self) -> None:
        """
        Raises:
            NotAuthenticatedError: If login has not succeeded
        """
        if not self.is_live:
            raise NotAuthenticatedError()

    def advance(self) -> int:
        """Increment the cursor for an outbound action and return it."""
        self.sequence += 1
        return self.sequence

    def reset_cursor(self, value: int) -> None:
        """Overwrite the cursor with the server's high-water mark."""
        self.sequence = value

    def reset(self) -> None:
        """Drop all login state, leaving the session not live."""
        self.identity = None
        self.queue_handle = None
        self.sequence = 0
        self.access_token = None

    def __repr__(self) -> str:
        # access_token stays out of logs
        return (
            f"Session(identity={self.identity!r}, queue_handle={self.queue_handle!r}, "
            f"sequence={self.sequence}, live={self.is_live})"
        )
