"""Caller-driven polling of the web presence message queue."""
from typing import List

from .protocols import Transport
from ..exceptions import FunctionalError, MalformedResponseError
from ..logging import get_logger
from ..response import ResponseDecoder
from ..session import Session
from ..updates import Update, decode_update

POLL_PATH = 'ISteamWebUserPresenceOAuth/Poll/v0001'


class PollLoop:
    """
    Polls for updates since the session's cursor.

    There is no timer and no background task: each ``poll()`` is one
    request, and the caller decides when to poll again.
    """

    def __init__(self, client: Transport):
        self._client = client
        self._logger = get_logger('steamchat.poller')

    async def poll(self, session: Session) -> List[Update]:
        """
        Check for updates and new messages.

        On failure the cursor is left untouched, so the call can simply be
        retried. On success the cursor is overwritten with the server's
        ``messagelast``, even when it moves backwards.

        Returns:
            Decoded updates in server order; unknown event types are dropped

        Raises:
            NotAuthenticatedError: If the session is not live
            TransportError: If the request fails
            MalformedResponseError: If the response is not a JSON object
            FunctionalError: If the server does not answer "OK" or omits
                ``messagelast``
        """
        session.require_live()

        body = await self._client.request(POLL_PATH, data={
            'access_token': session.access_token,
            'umqid': session.queue_handle,
            'message': str(session.sequence),
        })
        payload = ResponseDecoder.decode(body)

        if not payload.is_ok():
            raise FunctionalError(f"Poll failed: {payload.error}", error_code=payload.error)

        messagelast = payload.require('messagelast')
        try:
            cursor = int(messagelast)
        except (TypeError, ValueError):
            raise MalformedResponseError(f"Invalid messagelast: {messagelast!r}", body=body[:200])
        updates: List[Update] = []
        for entry in payload.get_list('messages'):
            update = decode_update(entry)
            if update is None:
                self._logger.debug(f"Ignoring update of type {entry.get_str('type')!r}")
                continue
            updates.append(update)

        # Only after the whole batch decoded; server-authoritative, not an increment
        session.reset_cursor(cursor)

        self._logger.debug(f"Poll returned {len(updates)} updates, cursor now {cursor}")
        return updates
