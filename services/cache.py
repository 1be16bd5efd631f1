import logging
import threading
import time
from typing import Callable, Optional

from models.candidate import Candidate

logger = logging.getLogger(__name__)


class CandidateCache:
    """
    Holds the full candidate pool between requests.

    The pool is refreshed synchronously by whichever request first finds it
    older than the TTL. Refreshes happen under a lock, so concurrent requests
    wait for a single fetch instead of each issuing their own. A failed fetch
    leaves an empty pool behind rather than raising.
    """

    def __init__(
        self,
        loader: Callable[[], list[Candidate]],
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._data: Optional[list[Candidate]] = None
        self._fetched_at: Optional[float] = None

    @property
    def size(self) -> int:
        return len(self._data) if self._data else 0

    def is_stale(self) -> bool:
        if self._data is None or self._fetched_at is None:
            return True
        return self._clock() - self._fetched_at > self._ttl

    def get(self) -> list[Candidate]:
        with self._lock:
            if self.is_stale():
                self._refresh()
            return self._data

    def invalidate(self):
        with self._lock:
            self._data = None
            self._fetched_at = None

    def _refresh(self):
        logger.info("Candidate cache stale, refreshing")
        try:
            fresh = self._loader()
        except Exception as e:
            logger.error("Candidate cache refresh failed, serving empty pool: %s", e)
            fresh = []
        self._data = list(fresh)
        self._fetched_at = self._clock()
        logger.info("Candidate cache holds %d candidates", len(self._data))
