"""Tests for the poll loop."""
import pytest

from steamchat.core.api.poller import POLL_PATH, PollLoop
from steamchat.core.enums import UpdateType
from steamchat.core.exceptions import (
    FunctionalError,
    MalformedResponseError,
    NotAuthenticatedError,
    TransportError,
)
from steamchat.core.response import EPOCH
from steamchat.core.session import Session
from steamchat.core.updates import EmoteUpdate, MessageUpdate, TypingNotification, UserUpdate


def message(kind, **fields):
    entry = {'type': kind, 'timestamp': 1700000000, 'steamid_from': '765612'}
    entry.update(fields)
    return entry


class TestPollLoop:
    """Test suite for PollLoop."""

    @pytest.fixture
    def poller(self, transport):
        return PollLoop(transport)

    @pytest.mark.asyncio
    async def test_poll_sends_cursor(self, poller, transport, live_session):
        """Test the cursor is sent as 'message'."""
        transport.queue(POLL_PATH, {'error': 'OK', 'messagelast': 10, 'messages': []})

        await poller.poll(live_session)

        assert transport.calls_to(POLL_PATH)[0]['data'] == {
            'access_token': 'token-abc',
            'umqid': 'umq-1234',
            'message': '10',
        }

    @pytest.mark.asyncio
    async def test_decodes_known_types_in_order(self, poller, transport, live_session):
        """Test one of each known type plus an unknown one yields four updates."""
        transport.queue(POLL_PATH, {
            'error': 'OK',
            'messagelast': 15,
            'messages': [
                message('saytext', text='hello'),
                message('foo'),
                message('emote', text='waves'),
                message('typing'),
                message('personastate', persona_state=1, persona_name='Gabe'),
            ],
        })

        updates = await poller.poll(live_session)

        assert len(updates) == 4
        assert isinstance(updates[0], MessageUpdate)
        assert isinstance(updates[1], EmoteUpdate)
        assert isinstance(updates[2], TypingNotification)
        assert isinstance(updates[3], UserUpdate)
        assert [u.type for u in updates] == [
            UpdateType.MESSAGE, UpdateType.EMOTE, UpdateType.TYPING_NOTIFICATION, UpdateType.USER_UPDATE
        ]

    @pytest.mark.asyncio
    async def test_local_messages(self, poller, transport, live_session):
        transport.queue(POLL_PATH, {
            'error': 'OK',
            'messagelast': 12,
            'messages': [message('my_saytext', text='mine'), message('saytext', text='theirs')],
        })

        updates = await poller.poll(live_session)

        assert [u.local for u in updates] == [True, False]

    @pytest.mark.asyncio
    async def test_cursor_overwritten(self, poller, transport, live_session):
        """Test the cursor becomes messagelast."""
        transport.queue(POLL_PATH, {'error': 'OK', 'messagelast': 42, 'messages': []})

        await poller.poll(live_session)

        assert live_session.sequence == 42

    @pytest.mark.asyncio
    async def test_cursor_accepts_decrease(self, poller, transport, live_session):
        """Test a lower server value is accepted."""
        transport.queue(POLL_PATH, {'error': 'OK', 'messagelast': 2})

        updates = await poller.poll(live_session)

        assert updates == []
        assert live_session.sequence == 2

    @pytest.mark.asyncio
    async def test_repeated_empty_polls(self, poller, transport, live_session):
        """Test two empty polls both return empty and keep the server cursor."""
        transport.queue(
            POLL_PATH,
            {'error': 'OK', 'messagelast': 20, 'messages': []},
            {'error': 'OK', 'messagelast': 20, 'messages': []},
        )

        first = await poller.poll(live_session)
        second = await poller.poll(live_session)

        assert first == [] and second == []
        assert live_session.sequence == 20
        assert transport.calls_to(POLL_PATH)[1]['data']['message'] == '20'

    @pytest.mark.asyncio
    async def test_error_not_ok_keeps_cursor(self, poller, transport, live_session):
        """Test explicit error leaves the cursor unchanged."""
        transport.queue(POLL_PATH, {'error': 'Timeout', 'messagelast': 99})

        with pytest.raises(FunctionalError) as exc_info:
            await poller.poll(live_session)

        assert exc_info.value.error_code == 'Timeout'
        assert live_session.sequence == 10

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_cursor(self, poller, transport, live_session):
        transport.queue(POLL_PATH, TransportError("down"))

        with pytest.raises(TransportError):
            await poller.poll(live_session)

        assert live_session.sequence == 10

    @pytest.mark.asyncio
    async def test_malformed_keeps_cursor(self, poller, transport, live_session):
        transport.queue(POLL_PATH, 'garbage')

        with pytest.raises(MalformedResponseError):
            await poller.poll(live_session)

        assert live_session.sequence == 10

    @pytest.mark.asyncio
    async def test_missing_messagelast(self, poller, transport, live_session):
        transport.queue(POLL_PATH, {'error': 'OK', 'messages': []})

        with pytest.raises(FunctionalError):
            await poller.poll(live_session)

        assert live_session.sequence == 10

    @pytest.mark.asyncio
    async def test_invalid_messages_field_keeps_cursor(self, poller, transport, live_session):
        transport.queue(POLL_PATH, {'error': 'OK', 'messagelast': 50, 'messages': 'nope'})

        with pytest.raises(MalformedResponseError):
            await poller.poll(live_session)

        assert live_session.sequence == 10

    @pytest.mark.asyncio
    async def test_requires_live_session(self, poller, transport):
        with pytest.raises(NotAuthenticatedError):
            await poller.poll(Session())

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_out_of_range_timestamp_uses_epoch(self, poller, transport, live_session):
        """Test an unrepresentable timestamp decodes as epoch zero."""
        transport.queue(POLL_PATH, {
            'error': 'OK',
            'messagelast': 42,
            'messages': [message('saytext', text='hi', timestamp=10 ** 15)],
        })

        updates = await poller.poll(live_session)

        assert updates[0].timestamp == EPOCH
        assert updates[0].text == 'hi'
        assert live_session.sequence == 42

    @pytest.mark.asyncio
    async def test_decode_failure_keeps_cursor(self, poller, transport, live_session, monkeypatch):
        """Test the cursor only moves once the whole batch decoded."""
        def broken(entry):
            raise ValueError("bad entry")

        monkeypatch.setattr('steamchat.core.api.poller.decode_update', broken)
        transport.queue(POLL_PATH, {
            'error': 'OK',
            'messagelast': 42,
            'messages': [message('saytext', text='hi')],
        })

        with pytest.raises(ValueError):
            await poller.poll(live_session)

        assert live_session.sequence == 10
