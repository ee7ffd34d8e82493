"""
Identity records returned by lookups.

Each record is an immutable snapshot built from one response entry. Absent
fields are substituted from the per-record default tables below, so the
leniency applied to every field is visible in one place.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Type, TypeVar

from .response import EPOCH, ResponsePayload
from .enums import AvatarSize, ProfileVisibility, UserStatus

E = TypeVar('E')

# Length of the format extension the server appends to avatar URLs
AVATAR_SUFFIX_LENGTH = 4

FRIEND_DEFAULTS: Dict[str, Any] = {
    'steamid': '',
    'relationship': '',
    'friend_since': 0,
}

USER_DEFAULTS: Dict[str, Any] = {
    'steamid': '',
    'communityvisibilitystate': int(ProfileVisibility.PRIVATE),
    'profilestate': 0,
    'personaname': '',
    'lastlogoff': 0,
    'profileurl': '',
    'personastate': int(UserStatus.OFFLINE),
    'avatar': '',
    'timecreated': 0,
    'primaryclanid': '',
    'realname': '',
    'loccountrycode': '',
    'locstatecode': '',
    'loccityid': -1,
}

GROUP_DEFAULTS: Dict[str, Any] = {
    'steamid': '',
    'permission': '',
    'relationship': '',
}

GROUP_INFO_DEFAULTS: Dict[str, Any] = {
    'steamid': '',
    'timecreated': 0,
    'name': '',
    'profileurl': '',
    'usersonline': 0,
    'usersinclanchat': 0,
    'usersingame': 0,
    'ownerid': '',
    'users': 0,
    'avatar': '',
    'headline': '',
    'summary': '',
    'abbreviation': '',
    'loccountrycode': '',
    'locstatecode': '',
    'loccityid': -1,
    'favoriteappid': -1,
}

SERVER_INFO_DEFAULTS: Dict[str, Any] = {
    'servertimestring': '',
}


class _Fields:
    """Typed field access against a default table."""

    def __init__(self, payload: ResponsePayload, defaults: Dict[str, Any]):
        self._payload = payload
        self._defaults = defaults

    def text(self, key: str) -> str:
        return self._payload.get_str(key, self._defaults[key])

    def integer(self, key: str) -> int:
        return self._payload.get_int(key, self._defaults[key])

    def timestamp(self, key: str) -> datetime:
        return self._payload.get_timestamp(key, self._defaults[key])

    def enum(self, key: str, enum_cls: Type[E]) -> E:
        value = self.integer(key)
        try:
            return enum_cls(value)
        except ValueError:
            return enum_cls(self._defaults[key])


def strip_avatar_suffix(url: str) -> str:
    """Remove the fixed format extension from a server avatar URL."""
    if not url:
        return ''
    return url[:-AVATAR_SUFFIX_LENGTH]


def avatar_url(base: str, size: AvatarSize = AvatarSize.SMALL) -> Optional[str]:
    """Build the URL for a stored avatar base at the given size."""
    if not base:
        return None
    return base + size.suffix


@dataclass(frozen=True)
class Friend:
    """Basic friend list entry."""
    steamid: str
    blocked: bool = False
    friend_since: datetime = EPOCH

    @classmethod
    def from_payload(cls, payload: ResponsePayload) -> 'Friend':
        fields = _Fields(payload, FRIEND_DEFAULTS)
        return cls(
            steamid=fields.text('steamid'),
            blocked=fields.text('relationship') == 'ignored',
            friend_since=fields.timestamp('friend_since')
        )


@dataclass(frozen=True)
class User:
    """
    Extended user profile.

    Attributes:
        steamid: 64-bit SteamID
        nickname: Persona name
        status: Current persona state
        avatar_url: Avatar URL without its format extension; use
            ``avatar()`` to get a fetchable URL
        location_city_id: -1 when unknown
    """
    steamid: str
    profile_visibility: ProfileVisibility = ProfileVisibility.PRIVATE
    profile_state: int = 0
    nickname: str = ''
    last_logoff: datetime = EPOCH
    profile_url: str = ''
    status: UserStatus = UserStatus.OFFLINE
    avatar_url: str = ''
    join_date: datetime = EPOCH
    primary_group_id: str = ''
    real_name: str = ''
    location_country_code: str = ''
    location_state_code: str = ''
    location_city_id: int = -1

    @classmethod
    def from_payload(cls, payload: ResponsePayload) -> 'User':
        fields = _Fields(payload, USER_DEFAULTS)
        return cls(
            steamid=fields.text('steamid'),
            profile_visibility=fields.enum('communityvisibilitystate', ProfileVisibility),
            profile_state=fields.integer('profilestate'),
            nickname=fields.text('personaname'),
            last_logoff=fields.timestamp('lastlogoff'),
            profile_url=fields.text('profileurl'),
            status=fields.enum('personastate', UserStatus),
            avatar_url=strip_avatar_suffix(fields.text('avatar')),
            join_date=fields.timestamp('timecreated'),
            primary_group_id=fields.text('primaryclanid'),
            real_name=fields.text('realname'),
            location_country_code=fields.text('loccountrycode'),
            location_state_code=fields.text('locstatecode'),
            location_city_id=fields.integer('loccityid')
        )

    def avatar(self, size: AvatarSize = AvatarSize.SMALL) -> Optional[str]:
        """Avatar URL at the requested size, or None without an avatar."""
        return avatar_url(self.avatar_url, size)


@dataclass(frozen=True)
class Group:
    """Basic group membership entry."""
    steamid: str
    invite_only: bool = False

    @classmethod
    def from_payload(cls, payload: ResponsePayload) -> 'Group':
        fields = _Fields(payload, GROUP_DEFAULTS)
        return cls(
            steamid=fields.text('steamid'),
            invite_only=fields.text('permission') == '2'
        )

    @staticmethod
    def is_membership(payload: ResponsePayload) -> bool:
        """Only entries with relationship 'Member' are group memberships."""
        return _Fields(payload, GROUP_DEFAULTS).text('relationship') == 'Member'


@dataclass(frozen=True)
class GroupInfo:
    """Extended group profile."""
    steamid: str
    creation_date: datetime = EPOCH
    name: str = ''
    profile_url: str = ''
    users_online: int = 0
    users_in_chat: int = 0
    users_in_game: int = 0
    owner: str = ''
    members: int = 0
    avatar_url: str = ''
    headline: str = ''
    summary: str = ''
    abbreviation: str = ''
    location_country_code: str = ''
    location_state_code: str = ''
    location_city_id: int = -1
    favorite_app_id: int = -1

    @classmethod
    def from_payload(cls, payload: ResponsePayload, community_url: str) -> 'GroupInfo':
        fields = _Fields(payload, GROUP_INFO_DEFAULTS)
        return cls(
            steamid=fields.text('steamid'),
            creation_date=fields.timestamp('timecreated'),
            name=fields.text('name'),
            profile_url=community_url + fields.text('profileurl'),
            users_online=fields.integer('usersonline'),
            users_in_chat=fields.integer('usersinclanchat'),
            users_in_game=fields.integer('usersingame'),
            owner=fields.text('ownerid'),
            members=fields.integer('users'),
            avatar_url=strip_avatar_suffix(fields.text('avatar')),
            headline=fields.text('headline'),
            summary=fields.text('summary'),
            abbreviation=fields.text('abbreviation'),
            location_country_code=fields.text('loccountrycode'),
            location_state_code=fields.text('locstatecode'),
            location_city_id=fields.integer('loccityid'),
            favorite_app_id=fields.integer('favoriteappid')
        )

    def avatar(self, size: AvatarSize = AvatarSize.SMALL) -> Optional[str]:
        return avatar_url(self.avatar_url, size)


@dataclass(frozen=True)
class ServerInfo:
    """Server clock as reported by the API."""
    server_time: datetime
    server_time_string: str = ''

    @classmethod
    def from_payload(cls, payload: ResponsePayload) -> 'ServerInfo':
        fields = _Fields(payload, SERVER_INFO_DEFAULTS)
        return cls(
            server_time=payload.get_timestamp('servertime'),
            server_time_string=fields.text('servertimestring')
        )
