"""Tests for the authentication service."""
import pytest

from steamchat.core.api.async_auth import AsyncAuthService, LOGON_PATH, TOKEN_PATH
from steamchat.core.api.config import APIConfig
from steamchat.core.enums import LoginStatus
from steamchat.core.exceptions import TransportError
from steamchat.core.session import Session

LOGON_OK = {'umqid': 'umq-1', 'steamid': '765611', 'message': 27, 'error': 'OK'}


class TestCredentialAuthentication:
    """Tests for the username/password path."""

    @pytest.fixture
    def auth(self, transport):
        return AsyncAuthService(transport, APIConfig.default())

    @pytest.mark.asyncio
    async def test_token_then_login(self, auth, transport):
        """Test access token leads to login and a live session."""
        transport.queue(TOKEN_PATH, {'access_token': 'tok'})
        transport.queue(LOGON_PATH, LOGON_OK)
        session = Session()

        result = await auth.authenticate(session, 'user', 'pass')

        assert result.status is LoginStatus.LOGIN_SUCCESSFUL
        assert result.ok is True
        assert result.steamid == '765611'
        assert session.is_live is True
        assert session.access_token == 'tok'
        assert session.queue_handle == 'umq-1'
        assert session.identity == '765611'
        assert session.sequence == 27

    @pytest.mark.asyncio
    async def test_token_request_fields(self, auth, transport):
        """Test the credential exchange form."""
        transport.queue(TOKEN_PATH, {'x_errorcode': 'invalid_password'})

        await auth.authenticate(Session(), 'user', 'p&ss', 'ABCDE')

        form = transport.calls_to(TOKEN_PATH)[0]['data']
        assert form['client_id'] == 'DE45CD61'
        assert form['grant_type'] == 'password'
        assert form['username'] == 'user'
        assert form['password'] == 'p&ss'
        assert form['x_emailauthcode'] == 'ABCDE'
        assert form['scope'] == 'read_profile write_profile read_client write_client'

    @pytest.mark.asyncio
    async def test_steam_guard_required(self, auth, transport):
        """Test SteamGuard challenge is distinct and skips login."""
        transport.queue(TOKEN_PATH, {'x_errorcode': 'steamguard_code_required'})
        session = Session()

        result = await auth.authenticate(session, 'user', 'pass')

        assert result.status is LoginStatus.STEAM_GUARD
        assert transport.calls_to(LOGON_PATH) == []
        assert session.is_live is False

    @pytest.mark.asyncio
    async def test_rejected_credentials(self, auth, transport):
        transport.queue(TOKEN_PATH, {'x_errorcode': 'invalid_password'})

        result = await auth.authenticate(Session(), 'user', 'bad')

        assert result.status is LoginStatus.LOGIN_FAILED
        assert result.error_code == 'invalid_password'

    @pytest.mark.asyncio
    async def test_no_token_no_error_code(self, auth, transport):
        transport.queue(TOKEN_PATH, {})

        result = await auth.authenticate(Session(), 'user', 'pass')

        assert result.status is LoginStatus.LOGIN_FAILED

    @pytest.mark.asyncio
    async def test_transport_failure(self, auth, transport):
        """Test transport failures collapse to LOGIN_FAILED."""
        transport.queue(TOKEN_PATH, TransportError("down", status=503))

        result = await auth.authenticate(Session(), 'user', 'pass')

        assert result.status is LoginStatus.LOGIN_FAILED

    @pytest.mark.asyncio
    async def test_malformed_token_response(self, auth, transport):
        transport.queue(TOKEN_PATH, 'not json')

        result = await auth.authenticate(Session(), 'user', 'pass')

        assert result.status is LoginStatus.LOGIN_FAILED


class TestTokenAuthentication:
    """Tests for the access token path."""

    @pytest.fixture
    def auth(self, transport):
        return AsyncAuthService(transport)

    @pytest.mark.asyncio
    async def test_login_with_token(self, auth, transport):
        """Test token path skips the credential exchange."""
        transport.queue(LOGON_PATH, LOGON_OK)
        session = Session()

        result = await auth.authenticate_with_token(session, 'cached')

        assert result.status is LoginStatus.LOGIN_SUCCESSFUL
        assert transport.calls_to(TOKEN_PATH) == []
        assert transport.calls_to(LOGON_PATH)[0]['data'] == {'access_token': 'cached'}
        assert session.sequence == 27

    @pytest.mark.asyncio
    async def test_login_without_umqid(self, auth, transport):
        """Test missing queue handle fails even on HTTP success."""
        transport.queue(LOGON_PATH, {'steamid': '765611', 'message': 1})
        session = Session()

        result = await auth.authenticate_with_token(session, 'expired')

        assert result.status is LoginStatus.LOGIN_FAILED
        assert session.is_live is False

    @pytest.mark.asyncio
    async def test_login_transport_failure(self, auth, transport):
        transport.queue(LOGON_PATH, TransportError("HTTP 401", status=401))
        session = Session()

        result = await auth.authenticate_with_token(session, 'expired')

        assert result.status is LoginStatus.LOGIN_FAILED
        assert session.is_live is False

    @pytest.mark.asyncio
    async def test_login_without_message_starts_at_zero(self, auth, transport):
        transport.queue(LOGON_PATH, {'umqid': 'umq-2', 'steamid': '1'})
        session = Session(sequence=99)

        await auth.authenticate_with_token(session, 'tok')

        assert session.sequence == 0

    @pytest.mark.asyncio
    async def test_failed_reauthentication_drops_old_queue(self, auth, transport, live_session):
        """Test a failed login does not leave the previous queue handle live."""
        transport.queue(LOGON_PATH, {'error': 'Not Logged On'})

        result = await auth.authenticate_with_token(live_session, 'revoked')

        assert result.status is LoginStatus.LOGIN_FAILED
        assert live_session.is_live is False
