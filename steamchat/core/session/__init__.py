"""
Session module.

Holds the in-memory state of a logged-in session. Nothing here is
persisted; callers that want to skip the credential step keep the
access token themselves.
"""
from .models import Session

__all__ = [
    'Session',
]
