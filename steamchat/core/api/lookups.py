"""
Read-only lookups: friends, users, groups, group profiles and server info.

Lookups over identifier lists go through the Paginator, so callers can
pass any number of ids despite the server's per-request limit.
"""
from typing import Any, Dict, List, Optional, Sequence

from .config import APIConfig
from .paginator import Paginator
from .protocols import Transport
from ..logging import get_logger
from ..models import Friend, Group, GroupInfo, ServerInfo, User
from ..response import ResponseDecoder, ResponsePayload
from ..session import Session

FRIEND_LIST_PATH = 'ISteamUserOAuth/GetFriendList/v0001'
USER_SUMMARIES_PATH = 'ISteamUserOAuth/GetUserSummaries/v0001'
GROUP_LIST_PATH = 'ISteamUserOAuth/GetGroupList/v0001'
GROUP_SUMMARIES_PATH = 'ISteamUserOAuth/GetGroupSummaries/v0001'
SERVER_INFO_PATH = 'ISteamWebAPIUtil/GetServerInfo/v0001'


class LookupService:
    """
    One-shot queries against the Steam Web API.

    Every call returns fresh snapshots; nothing is cached.
    """

    def __init__(
        self,
        client: Transport,
        config: Optional[APIConfig] = None,
        paginator: Optional[Paginator] = None
    ):
        self._client = client
        self._config = config or APIConfig.default()
        self._paginator = paginator or Paginator(self._config.page_size)
        self._logger = get_logger('steamchat.lookups')

    async def _get(self, path: str, params: Dict[str, Any]) -> ResponsePayload:
        body = await self._client.request(path, params=params)
        return ResponseDecoder.decode(body)

    async def get_friends(self, session: Session, steamid: Optional[str] = None) -> List[Friend]:
        """
        Fetch all friends of a user.

        Args:
            session: Live session
            steamid: Target user, defaults to the logged-in user

        Raises:
            NotAuthenticatedError, TransportError, MalformedResponseError,
            FunctionalError (no 'friends' in the response)
        """
        session.require_live()
        payload = await self._get(FRIEND_LIST_PATH, {
            'access_token': session.access_token,
            'steamid': steamid or session.identity,
        })
        return [Friend.from_payload(entry) for entry in payload.require_list('friends')]

    async def get_user_info(self, session: Session, steamids: Sequence[str]) -> List[User]:
        """
        Fetch profiles of the given users, any number of ids.

        Results are in the order the server returns them for each page,
        pages in input order.
        """
        session.require_live()

        async def fetch_page(page: List[str]) -> List[User]:
            payload = await self._get(USER_SUMMARIES_PATH, {
                'access_token': session.access_token,
                'steamids': ','.join(page),
            })
            return [User.from_payload(entry) for entry in payload.require_list('players')]

        return await self._paginator.fetch_all(steamids, fetch_page)

    async def get_groups(self, session: Session, steamid: Optional[str] = None) -> List[Group]:
        """Fetch the groups a user is a member of."""
        session.require_live()
        payload = await self._get(GROUP_LIST_PATH, {
            'access_token': session.access_token,
            'steamid': steamid or session.identity,
        })
        return [
            Group.from_payload(entry)
            for entry in payload.require_list('groups')
            if Group.is_membership(entry)
        ]

    async def get_group_info(self, session: Session, steamids: Sequence[str]) -> List[GroupInfo]:
        """Fetch profiles of the given groups, any number of ids."""
        session.require_live()
        community_url = self._config.community_url

        async def fetch_page(page: List[str]) -> List[GroupInfo]:
            payload = await self._get(GROUP_SUMMARIES_PATH, {
                'access_token': session.access_token,
                'steamids': ','.join(page),
            })
            return [
                GroupInfo.from_payload(entry, community_url)
                for entry in payload.require_list('groups')
            ]

        return await self._paginator.fetch_all(steamids, fetch_page)

    async def get_server_info(self) -> ServerInfo:
        """Fetch the server clock. Needs no session."""
        payload = await self._get(SERVER_INFO_PATH, {})
        payload.require('servertime')
        return ServerInfo.from_payload(payload)
