"""
Async authentication service.

Handles the OAuth credential exchange and the web presence logon that
makes a Session live.
"""
from dataclasses import dataclass
from typing import Optional

from .config import APIConfig
from .protocols import Transport
from ..enums import LoginStatus
from ..exceptions import SteamException
from ..logging import get_logger
from ..response import ResponseDecoder
from ..session import Session

TOKEN_PATH = 'ISteamOAuth2/GetTokenWithCredentials/v0001'
LOGON_PATH = 'ISteamWebUserPresenceOAuth/Logon/v0001'

STEAM_GUARD_ERROR = 'steamguard_code_required'


@dataclass
class AuthResult:
    """Authentication result."""
    status: LoginStatus
    steamid: Optional[str] = None
    access_token: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoginStatus.LOGIN_SUCCESSFUL


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Every failure is reported as LOGIN_FAILED except the SteamGuard
    challenge, which callers answer by calling ``authenticate`` again
    with the code sent by e-mail.
    """

    def __init__(self, client: Transport, config: Optional[APIConfig] = None):
        """
        Initialize auth service.

        Args:
            client: Transport used for the requests
            config: API configuration (OAuth client id and scope)
        """
        self._client = client
        self._config = config or APIConfig.default()
        self._logger = get_logger('steamchat.auth')

    async def authenticate(
        self,
        session: Session,
        username: str,
        password: str,
        emailauthcode: str = ''
    ) -> AuthResult:
        """
        Authenticate with a username and password.

        Triggers the SteamGuard e-mail when the account requires it.

        Args:
            session: Session to make live
            username: Account name
            password: Account password
            emailauthcode: SteamGuard code received by e-mail

        Returns:
            AuthResult with the login status
        """
        try:
            body = await self._client.request(TOKEN_PATH, data={
                'client_id': self._config.client_id,
                'grant_type': 'password',
                'username': username,
                'password': password,
                'x_emailauthcode': emailauthcode,
                'scope': self._config.oauth_scope,
            })
            payload = ResponseDecoder.decode(body)
        except SteamException as e:
            self._logger.warning(f"Token request failed: {e}")
            return AuthResult(LoginStatus.LOGIN_FAILED)

        access_token = payload.try_get('access_token')
        if access_token is not None:
            return await self.authenticate_with_token(session, str(access_token))

        error_code = payload.try_get('x_errorcode')
        if error_code == STEAM_GUARD_ERROR:
            self._logger.info("SteamGuard code required, check e-mail")
            return AuthResult(LoginStatus.STEAM_GUARD, error_code=error_code)

        self._logger.warning(f"Credentials rejected: {error_code}")
        return AuthResult(LoginStatus.LOGIN_FAILED, error_code=error_code)

    async def authenticate_with_token(self, session: Session, access_token: str) -> AuthResult:
        """
        Authenticate with a previously issued access token.

        Args:
            session: Session to make live
            access_token: Token from an earlier credential exchange

        Returns:
            AuthResult with the login status
        """
        session.access_token = access_token
        session.queue_handle = None

        if await self._login(session):
            return AuthResult(
                LoginStatus.LOGIN_SUCCESSFUL,
                steamid=session.identity,
                access_token=access_token
            )
        return AuthResult(LoginStatus.LOGIN_FAILED, access_token=access_token)

    async def _login(self, session: Session) -> bool:
        """Exchange the access token for a queue handle."""
        try:
            body = await self._client.request(LOGON_PATH, data={
                'access_token': session.access_token,
            })
            payload = ResponseDecoder.decode(body)
        except SteamException as e:
            self._logger.warning(f"Logon failed: {e}")
            return False

        umqid = payload.try_get('umqid')
        if umqid is None:
            self._logger.warning("Logon response has no umqid")
            return False

        session.identity = payload.get_str('steamid')
        session.queue_handle = str(umqid)
        session.reset_cursor(payload.get_int('message', 0))

        self._logger.info(f"Logged in as {session.identity}")
        return True
