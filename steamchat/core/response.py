"""
Response decoding for Steam Web API calls.

Turns raw response bodies into ResponsePayload objects. A body that is not
a JSON object is a MalformedResponseError; a missing field is never an
error by itself, callers decide whether a field is required.
"""
import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from .exceptions import FunctionalError, MalformedResponseError
from .logging import get_logger

logger = get_logger('steamchat.response')

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def unix_timestamp(seconds: int, default: datetime = EPOCH) -> datetime:
    """Convert unix seconds to an aware UTC datetime, or default if out of range."""
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.debug(f"Timestamp out of range: {seconds!r}")
        return default


class ResponsePayload(Mapping):
    """
    Read-only view over a decoded response object.

    Lookups never raise for absent keys: use ``try_get`` or the typed
    getters with an explicit default, and ``require`` for fields whose
    absence means the call failed.
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ResponsePayload({self._data!r})"

    def try_get(self, key: str, default: Any = None) -> Any:
        """Return the field value, or ``default`` if absent or null."""
        value = self._data.get(key)
        return default if value is None else value

    def require(self, key: str) -> Any:
        """
        Return a required field.

        Raises:
            FunctionalError: If the field is absent or null
        """
        value = self._data.get(key)
        if value is None:
            raise FunctionalError(f"Response is missing required field '{key}'")
        return value

    def get_str(self, key: str, default: str = '') -> str:
        value = self.try_get(key)
        return default if value is None else str(value)

    def get_int(self, key: str, default: int = -1) -> int:
        value = self.try_get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.debug(f"Field '{key}' is not an integer: {value!r}")
            return default

    def get_timestamp(self, key: str, default: int = 0) -> datetime:
        return unix_timestamp(self.get_int(key, default), unix_timestamp(default))

    def get_list(self, key: str) -> List['ResponsePayload']:
        """Return a list of nested objects; non-object entries are skipped."""
        items = self.try_get(key, [])
        if not isinstance(items, list):
            raise MalformedResponseError(f"Field '{key}' is not a list")
        return [ResponsePayload(item) for item in items if isinstance(item, dict)]

    def require_list(self, key: str) -> List['ResponsePayload']:
        self.require(key)
        return self.get_list(key)

    @property
    def error(self) -> Optional[str]:
        """The explicit 'error' field, if the server sent one."""
        value = self._data.get('error')
        return None if value is None else str(value)

    def is_ok(self) -> bool:
        """True only for an explicit ``"error": "OK"``."""
        return self.error == 'OK'

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)


class ResponseDecoder:
    """Decodes raw response bodies."""

    @staticmethod
    def decode(body: str) -> ResponsePayload:
        """
        Parse a response body.

        Args:
            body: Raw response text

        Returns:
            ResponsePayload wrapping the top-level JSON object

        Raises:
            MalformedResponseError: If the body is not a JSON object
        """
        try:
            data = json.loads(body)
        except (TypeError, ValueError) as e:
            snippet = body[:200] if isinstance(body, str) else body
            raise MalformedResponseError(f"Invalid JSON response: {e}", body=snippet)

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}",
                body=body[:200]
            )

        return ResponsePayload(data)
