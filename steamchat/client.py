"""
SteamClient - High-level async client for Steam web chat.

Example:
    >>> async with SteamClient() as steam:
    ...     status = await steam.authenticate("user", "password")
    ...     if status is LoginStatus.STEAM_GUARD:
    ...         status = await steam.authenticate("user", "password", input("Code: "))
    ...     for update in await steam.poll():
    ...         print(update)
"""
from typing import Callable, Iterable, List, Optional, Union

from .core.api import (
    APIConfig,
    AsyncAPIClient,
    AsyncAuthService,
    AuthResult,
    EventEmitter,
    LookupService,
    Paginator,
    PollLoop,
    ProxyConfig,
    SequencedRequester,
    SSLConfig,
    TimeoutConfig,
    Transport,
)
from .core.enums import AvatarSize, LoginStatus, UpdateType
from .core.exceptions import FunctionalError
from .core.logging import get_logger
from .core.models import Friend, Group, GroupInfo, ServerInfo, User
from .core.session import Session
from .core.updates import Update

UserRef = Union[str, User, Friend]
GroupRef = Union[str, Group, GroupInfo]

# Per-kind events emitted after the generic 'update' event
UPDATE_EVENTS = {
    UpdateType.MESSAGE: 'message',
    UpdateType.EMOTE: 'emote',
    UpdateType.TYPING_NOTIFICATION: 'typing',
    UpdateType.USER_UPDATE: 'user_update',
}


def _steamid(ref: Union[str, User, Friend, Group, GroupInfo]) -> str:
    return ref if isinstance(ref, str) else ref.steamid


class SteamClient:
    """
    High-level async client for Steam Friends over the Web API.

    Owns one transport and one Session. Poll on a timer of your choosing
    and interleave lookups and sends between polls:

        >>> async with SteamClient() as steam:
        ...     await steam.authenticate_with_token(token)
        ...     steam.on('message', lambda u: print(u.origin, u.text))
        ...     while True:
        ...         await steam.poll()
        ...         await asyncio.sleep(2)

    Calls against one client must not run concurrently: sends and polls
    share the session's message cursor.
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        *,
        transport: Optional[Transport] = None,
        session: Optional[Session] = None
    ):
        """
        Initialize Steam client.

        Args:
            config: Optional API configuration
            transport: Custom transport (defaults to an AsyncAPIClient)
            session: Existing session state (defaults to a fresh one)
        """
        self._config = config or APIConfig.default()
        self._owns_transport = transport is None
        self._api: Transport = transport or AsyncAPIClient(self._config)
        self._session = session or Session()
        self._logger = get_logger('steamchat.client')

        self._auth = AsyncAuthService(self._api, self._config)
        self._requester = SequencedRequester(self._api)
        self._poller = PollLoop(self._api)
        self._lookups = LookupService(self._api, self._config, Paginator(self._config.page_size))
        self._events = EventEmitter('steamchat.client.events')
        self._last_auth: Optional[AuthResult] = None

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        proxy: Optional[str] = None,
        proxy_user: Optional[str] = None,
        proxy_pass: Optional[str] = None,
        timeout: float = 60,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            proxy: Proxy URL (e.g., "http://proxy:8080")
            proxy_user: Proxy username
            proxy_pass: Proxy password
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            user_agent: Custom user agent string

        Returns:
            APIConfig instance
        """
        proxy_config = None
        if proxy:
            proxy_config = ProxyConfig(url=proxy, username=proxy_user, password=proxy_pass)

        config = APIConfig(
            proxy=proxy_config,
            timeout=TimeoutConfig(total=timeout),
            ssl=SSLConfig(verify=verify_ssl)
        )
        if user_agent:
            config.user_agent = user_agent
        return config

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def __aenter__(self) -> 'SteamClient':
        if self._owns_transport:
            await self._api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Close the transport if this client created it. No remote logout."""
        if self._owns_transport:
            await self._api.close()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def access_token(self) -> Optional[str]:
        """Token to cache for ``authenticate_with_token`` on later runs."""
        return self._session.access_token

    @property
    def steamid(self) -> Optional[str]:
        return self._session.identity

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_live

    @property
    def last_auth(self) -> Optional[AuthResult]:
        return self._last_auth

    # =========================================================================
    # Authentication
    # =========================================================================

    async def authenticate(self, username: str, password: str, emailauthcode: str = '') -> LoginStatus:
        """
        Authenticate with a username and password.

        Returns LoginStatus.STEAM_GUARD when the account needs the code
        sent by e-mail; call again with ``emailauthcode`` set.
        """
        self._last_auth = await self._auth.authenticate(
            self._session, username, password, emailauthcode
        )
        return self._last_auth.status

    async def authenticate_with_token(self, access_token: str) -> LoginStatus:
        """Authenticate with an access token from an earlier login."""
        self._last_auth = await self._auth.authenticate_with_token(self._session, access_token)
        return self._last_auth.status

    # =========================================================================
    # Polling and events
    # =========================================================================

    def on(self, event: str, callback: Callable) -> 'SteamClient':
        """
        Register an update handler.

        Events: 'update' (every update), 'message', 'emote', 'typing',
        'user_update'.
        """
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'SteamClient':
        """Remove an update handler."""
        self._events.off(event, callback)
        return self

    async def poll(self) -> List[Update]:
        """
        Check for updates and new messages.

        Registered handlers are called for each update, in order, before
        the list is returned.
        """
        updates = await self._poller.poll(self._session)
        for update in updates:
            await self._events.emit('update', update)
            await self._events.emit(UPDATE_EVENTS[update.type], update)
        return updates

    # =========================================================================
    # Outbound actions
    # =========================================================================

    async def send_message(self, recipient: UserRef, text: str) -> bool:
        """Send a text message. Returns True if the server accepted it."""
        return await self._requester.send_message(self._session, _steamid(recipient), text)

    async def send_emote(self, recipient: UserRef, text: str) -> bool:
        """Send an emote (/me) message."""
        return await self._requester.send_emote(self._session, _steamid(recipient), text)

    async def send_typing_notification(self, recipient: UserRef) -> bool:
        """Let a user know you're typing. Should be called periodically."""
        return await self._requester.send_typing_notification(self._session, _steamid(recipient))

    # =========================================================================
    # Lookups
    # =========================================================================

    async def get_friends(self, steamid: Optional[str] = None) -> List[Friend]:
        """Fetch all friends of a user (default: yourself)."""
        return await self._lookups.get_friends(self._session, steamid)

    async def get_user_info(self, users: Iterable[UserRef]) -> List[User]:
        """Fetch profiles for any number of users, ids or records."""
        return await self._lookups.get_user_info(self._session, [_steamid(u) for u in users])

    async def get_user(self, steamid: Optional[str] = None) -> User:
        """
        Fetch one user profile (default: yourself).

        Raises:
            FunctionalError: If the server returns no profile
        """
        steamid = steamid or self._session.identity
        users = await self.get_user_info([steamid] if steamid else [])
        if not users:
            raise FunctionalError(f"No profile returned for {steamid}")
        return users[0]

    async def get_groups(self, steamid: Optional[str] = None) -> List[Group]:
        """Fetch the groups a user is a member of (default: yourself)."""
        return await self._lookups.get_groups(self._session, steamid)

    async def get_group_info(self, groups: Iterable[GroupRef]) -> List[GroupInfo]:
        """Fetch profiles for any number of groups, ids or records."""
        return await self._lookups.get_group_info(self._session, [_steamid(g) for g in groups])

    async def get_group(self, steamid: str) -> GroupInfo:
        """
        Fetch one group profile.

        Raises:
            FunctionalError: If the server returns no profile
        """
        groups = await self.get_group_info([steamid])
        if not groups:
            raise FunctionalError(f"No profile returned for group {steamid}")
        return groups[0]

    async def get_server_info(self) -> ServerInfo:
        """Fetch the server clock. Works without authentication."""
        return await self._lookups.get_server_info()

    async def get_avatar(
        self,
        record: Union[User, GroupInfo],
        size: AvatarSize = AvatarSize.SMALL
    ) -> Optional[bytes]:
        """
        Download an avatar image.

        Returns:
            Raw image bytes, or None if the record has no avatar
        """
        url = record.avatar(size)
        if url is None:
            return None
        return await self._api.fetch(url)
