"""Tests for poll update decoding."""
from steamchat.core.enums import UpdateType, UserStatus
from steamchat.core.response import ResponsePayload
from steamchat.core.updates import (
    EmoteUpdate,
    MessageUpdate,
    TypingNotification,
    UserUpdate,
    decode_update,
)


def entry(**fields):
    base = {'steamid_from': '765611', 'timestamp': 1700000000}
    base.update(fields)
    return ResponsePayload(base)


class TestDecodeUpdate:
    """Test suite for decode_update."""

    def test_saytext(self):
        """Test incoming message."""
        update = decode_update(entry(type='saytext', text='hello'))

        assert isinstance(update, MessageUpdate)
        assert update.type is UpdateType.MESSAGE
        assert update.text == 'hello'
        assert update.local is False
        assert update.origin == '765611'
        assert update.timestamp.year == 2023

    def test_my_saytext_is_local(self):
        """Test messages from this session are flagged local."""
        update = decode_update(entry(type='my_saytext', text='hi'))

        assert isinstance(update, MessageUpdate)
        assert update.local is True

    def test_emote(self):
        update = decode_update(entry(type='emote', text='waves'))

        assert isinstance(update, EmoteUpdate)
        assert update.type is UpdateType.EMOTE
        assert update.text == 'waves'

    def test_typing(self):
        update = decode_update(entry(type='typing'))

        assert isinstance(update, TypingNotification)
        assert update.type is UpdateType.TYPING_NOTIFICATION
        assert update.text == ''

    def test_personastate(self):
        """Test persona change carries status and nickname."""
        update = decode_update(entry(type='personastate', persona_state=3, persona_name='Gabe'))

        assert isinstance(update, UserUpdate)
        assert update.type is UpdateType.USER_UPDATE
        assert update.status is UserStatus.AWAY
        assert update.nickname == 'Gabe'

    def test_personastate_unknown_status(self):
        update = decode_update(entry(type='personastate', persona_state=42))

        assert update.status is UserStatus.OFFLINE

    def test_unknown_type_dropped(self):
        """Test unknown event kinds decode to None."""
        assert decode_update(entry(type='foo')) is None
        assert decode_update(entry()) is None
