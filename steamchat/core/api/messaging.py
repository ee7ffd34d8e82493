"""
Outbound user actions.

Every action consumes one slot of the session's message cursor. The
cursor is advanced before the request goes out, whatever the server
answers, so the next poll's cursor accounts for it.
"""
from typing import Dict, Optional

from .protocols import Transport
from ..logging import get_logger
from ..response import ResponseDecoder
from ..session import Session

MESSAGE_PATH = 'ISteamWebUserPresenceOAuth/Message/v0001'


class SequencedRequester:
    """Sends messages and typing notices on behalf of a live session."""

    def __init__(self, client: Transport):
        self._client = client
        self._logger = get_logger('steamchat.messaging')

    async def send_message(self, session: Session, steamid_dst: str, text: str) -> bool:
        """
        Send a chat message.

        Returns:
            True if the server answered ``"error": "OK"``

        Raises:
            NotAuthenticatedError: If the session is not live
            TransportError: If the request fails
            MalformedResponseError: If the response is not a JSON object
        """
        return await self._send(session, 'saytext', steamid_dst, text)

    async def send_emote(self, session: Session, steamid_dst: str, text: str) -> bool:
        """Send an emote (/me) message; same contract as send_message."""
        return await self._send(session, 'emote', steamid_dst, text)

    async def send_typing_notification(self, session: Session, steamid_dst: str) -> bool:
        """
        Let a user know we are typing. Should be called periodically while
        the user types.
        """
        return await self._send(session, 'typing', steamid_dst)

    async def _send(
        self,
        session: Session,
        kind: str,
        steamid_dst: str,
        text: Optional[str] = None
    ) -> bool:
        session.require_live()

        form: Dict[str, str] = {
            'access_token': session.access_token,
            'umqid': session.queue_handle,
            'type': kind,
        }
        if text is not None:
            form['text'] = text
        form['steamid_dst'] = steamid_dst

        sequence = session.advance()
        self._logger.debug(f"Sending {kind} to {steamid_dst} (sequence {sequence})")

        body = await self._client.request(MESSAGE_PATH, data=form)
        payload = ResponseDecoder.decode(body)

        if not payload.is_ok():
            self._logger.warning(f"{kind} to {steamid_dst} rejected: {payload.error}")
            return False
        return True
