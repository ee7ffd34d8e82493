"""Pytest fixtures for steamchat tests."""
import json
from collections import defaultdict, deque
from typing import Any, Dict, List, Optional

import pytest

from steamchat.core.session import Session


class FakeTransport:
    """
    Transport returning queued responses per path and recording calls.

    Queue a dict (sent as JSON), a raw string body, or an exception
    instance to raise.
    """

    def __init__(self):
        self.responses: Dict[str, deque] = defaultdict(deque)
        self.calls: List[Dict[str, Any]] = []
        self.fetched: List[str] = []
        self.fetch_result: bytes = b''

    def queue(self, path: str, *responses: Any) -> 'FakeTransport':
        self.responses[path].extend(responses)
        return self

    async def request(self, path: str, params: Optional[dict] = None, data: Optional[dict] = None) -> str:
        self.calls.append({'path': path, 'params': params, 'data': data})
        if not self.responses[path]:
            raise AssertionError(f"Unexpected request to {path}")
        response = self.responses[path].popleft()
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return response
        return json.dumps(response)

    async def fetch(self, url: str) -> bytes:
        self.fetched.append(url)
        return self.fetch_result

    def calls_to(self, path: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call['path'] == path]


@pytest.fixture
def transport():
    """Fresh fake transport."""
    return FakeTransport()


@pytest.fixture
def live_session():
    """Session as left by a successful login."""
    return Session(
        identity='76561197960287930',
        queue_handle='umq-1234',
        sequence=10,
        access_token='token-abc'
    )


@pytest.fixture
def sample_player():
    """User summary entry as returned by GetUserSummaries."""
    return {
        'steamid': '76561197960287930',
        'communityvisibilitystate': 3,
        'profilestate': 1,
        'personaname': 'Rabscuttle',
        'lastlogoff': 1699900000,
        'profileurl': 'http://steamcommunity.com/id/rabscuttle/',
        'avatar': 'http://media.steampowered.com/avatars/ab12cd.jpg',
        'personastate': 1,
        'realname': 'Robin Walker',
        'primaryclanid': '103582791429521408',
        'timecreated': 1063407589,
        'loccountrycode': 'US',
        'locstatecode': 'WA',
        'loccityid': 3961,
    }


@pytest.fixture
def sample_group():
    """Group summary entry as returned by GetGroupSummaries."""
    return {
        'steamid': '103582791429521408',
        'timecreated': 1195593600,
        'name': 'Valve',
        'profileurl': 'valve',
        'usersonline': 1200,
        'usersinclanchat': 40,
        'usersingame': 300,
        'ownerid': '76561197960287930',
        'users': 50000,
        'avatar': 'http://media.steampowered.com/avatars/ffee00.jpg',
        'headline': 'Official group',
        'abbreviation': 'VLV',
    }
