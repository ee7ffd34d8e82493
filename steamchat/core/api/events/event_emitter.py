"""Event emitter for decoded updates."""
import inspect
from typing import Any, Callable, Dict, List, Optional

from ...logging import get_logger


class EventEmitter:
    """
    Dispatches events to registered handlers.

    Handlers may be plain functions or coroutine functions; coroutine
    results are awaited in registration order.
    """

    def __init__(self, logger_name: str = 'steamchat.events'):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}
        self._logger = get_logger(logger_name)

    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        self._events.setdefault(event, []).append(callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes one handler, or all handlers of the event."""
        if event not in self._events:
            return self

        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [cb for cb in self._events[event] if cb != callback]

        return self

    def listeners(self, event: str) -> List[Callable]:
        return list(self._events.get(event, []))

    async def emit(self, event: str, *args: Any, **kwargs: Any) -> int:
        """
        Emits an event.

        A handler that raises is logged and skipped; the remaining
        handlers still run.

        Returns:
            Number of handlers called
        """
        handlers = self.listeners(event)
        for callback in handlers:
            try:
                result = callback(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                self._logger.exception(f"Handler for '{event}' failed")
        if handlers:
            self._logger.debug(f"Dispatched '{event}' to {len(handlers)} handlers")
        return len(handlers)
