"""Pagination of identifier lists over the server's per-request limit."""
from typing import Awaitable, Callable, List, Sequence, TypeVar

from ..logging import get_logger

T = TypeVar('T')

PageFetch = Callable[[List[str]], Awaitable[Sequence[T]]]


class Paginator:
    """
    Splits identifier lists into pages and fetches them in order.

    Pages are requested one at a time, in input order, so the combined
    result lines up positionally with the input. Any page failure fails
    the whole call.
    """

    def __init__(self, page_size: int = 100):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self._logger = get_logger('steamchat.api.paginator')

    def pages(self, ids: Sequence[str]) -> List[List[str]]:
        """Consecutive chunks of ``page_size``; the last may be shorter."""
        return [
            list(ids[start:start + self.page_size])
            for start in range(0, len(ids), self.page_size)
        ]

    async def fetch_all(self, ids: Sequence[str], page_fetch: PageFetch) -> List[T]:
        """
        Fetch every page and concatenate the results.

        Args:
            ids: Ordered identifiers
            page_fetch: Coroutine function fetching one page

        Returns:
            Results of all pages, in page order

        Raises:
            Whatever ``page_fetch`` raises; no partial result is returned
        """
        results: List[T] = []
        pages = self.pages(ids)

        for index, page in enumerate(pages):
            self._logger.debug(f"Fetching page {index + 1}/{len(pages)} ({len(page)} ids)")
            results.extend(await page_fetch(page))

        return results
