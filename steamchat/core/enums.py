"""Enumerations shared by the Steam session client."""
from enum import Enum, IntEnum


class AvatarSize(Enum):
    """Available avatar resolutions and the URL suffix that selects them."""
    SMALL = '.jpg'
    MEDIUM = '_medium.jpg'
    LARGE = '_full.jpg'

    @property
    def suffix(self) -> str:
        return self.value


class LoginStatus(Enum):
    """Outcome of an authentication attempt."""
    LOGIN_FAILED = 'login_failed'
    LOGIN_SUCCESSFUL = 'login_successful'
    STEAM_GUARD = 'steam_guard'


class ProfileVisibility(IntEnum):
    """Visibility of a user's community profile."""
    PRIVATE = 1
    PUBLIC = 3
    FRIENDS_ONLY = 8


class UpdateType(Enum):
    """Kinds of updates decoded from a poll."""
    USER_UPDATE = 'user_update'
    MESSAGE = 'message'
    EMOTE = 'emote'
    TYPING_NOTIFICATION = 'typing'


class UserStatus(IntEnum):
    """Persona state of a user."""
    OFFLINE = 0
    ONLINE = 1
    BUSY = 2
    AWAY = 3
    SNOOZE = 4
