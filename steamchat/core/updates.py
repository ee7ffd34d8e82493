"""
Updates decoded from the poll event stream.

Each known event kind has its own dataclass; ``Update`` is the union of
them. ``decode_update`` returns None for event kinds this client does not
know, so new server event kinds never break a poll.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from .enums import UpdateType, UserStatus
from .response import ResponsePayload


@dataclass(frozen=True)
class MessageUpdate:
    """A chat message. ``local`` is True for messages sent by this session."""
    timestamp: datetime
    origin: str
    text: str
    local: bool = False
    type = UpdateType.MESSAGE


@dataclass(frozen=True)
class EmoteUpdate:
    """An emote (/me) message."""
    timestamp: datetime
    origin: str
    text: str
    type = UpdateType.EMOTE


@dataclass(frozen=True)
class TypingNotification:
    """The origin user is typing."""
    timestamp: datetime
    origin: str
    text: str = ''
    type = UpdateType.TYPING_NOTIFICATION


@dataclass(frozen=True)
class UserUpdate:
    """Persona change of the origin user."""
    timestamp: datetime
    origin: str
    status: UserStatus
    nickname: str
    type = UpdateType.USER_UPDATE


Update = Union[MessageUpdate, EmoteUpdate, TypingNotification, UserUpdate]


def _status(entry: ResponsePayload) -> UserStatus:
    try:
        return UserStatus(entry.get_int('persona_state', int(UserStatus.OFFLINE)))
    except ValueError:
        return UserStatus.OFFLINE


def decode_update(entry: ResponsePayload) -> Optional[Update]:
    """
    Decode one entry of a poll's ``messages`` array.

    Args:
        entry: Message object from the poll response

    Returns:
        The typed update, or None for unknown event types
    """
    kind = entry.get_str('type')
    timestamp = entry.get_timestamp('timestamp')
    origin = entry.get_str('steamid_from')

    if kind in ('saytext', 'my_saytext'):
        return MessageUpdate(
            timestamp=timestamp,
            origin=origin,
            text=entry.get_str('text'),
            local=kind == 'my_saytext'
        )
    if kind == 'emote':
        return EmoteUpdate(timestamp=timestamp, origin=origin, text=entry.get_str('text'))
    if kind == 'typing':
        return TypingNotification(timestamp=timestamp, origin=origin, text=entry.get_str('text'))
    if kind == 'personastate':
        return UserUpdate(
            timestamp=timestamp,
            origin=origin,
            status=_status(entry),
            nickname=entry.get_str('persona_name')
        )
    return None
