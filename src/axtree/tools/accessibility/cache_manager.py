"""
Process-wide cache of raw accessibility trees.

Entries are keyed by application identifier (and window index) and have no
TTL: they live until cleared explicitly. Reads run concurrently; writes and
clears are exclusive, so a reload is never interleaved with a read.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional, Tuple

from ...schemas.raw import RawElement

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, Optional[int]]


class ReadWriteLock:
    """Many readers or one writer; waiting writers block new readers."""

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writer or self._waiting_writers:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._condition:
            self._waiting_writers += 1
            while self._writer or self._readers:
                self._condition.wait()
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._condition:
                self._writer = False
                self._condition.notify_all()


class ElementCache:
    """
    Explicit raw-tree cache shared by dump services.

    Created once per process (or per test) and passed by reference.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, RawElement] = {}
        self._lock = ReadWriteLock()

    def get(
        self, app_identifier: str, window_index: Optional[int] = None
    ) -> Optional[RawElement]:
        with self._lock.read_locked():
            return self._entries.get((app_identifier, window_index))

    def put(
        self, app_identifier: str, tree: RawElement, window_index: Optional[int] = None
    ) -> None:
        with self._lock.write_locked():
            self._entries[(app_identifier, window_index)] = tree

    def get_or_load(
        self,
        app_identifier: str,
        loader: Callable[[], RawElement],
        window_index: Optional[int] = None,
    ) -> RawElement:
        """
        Return the cached tree, loading and storing it on a miss.

        Args:
            app_identifier: Application identifier
            loader: Called under the write lock on a miss; its errors propagate
            window_index: Window index, or None for the whole application

        Returns:
            Cached or freshly loaded raw tree
        """
        key = (app_identifier, window_index)
        cached = self.get(app_identifier, window_index)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        with self._lock.write_locked():
            cached = self._entries.get(key)
            if cached is not None:
                return cached
            logger.debug(f"Cache miss for {key}, loading")
            tree = loader()
            self._entries[key] = tree
            return tree

    def clear(self, app_identifier: Optional[str] = None) -> int:
        """
        Remove entries for one application, or everything.

        Returns:
            Number of entries removed
        """
        with self._lock.write_locked():
            if app_identifier is None:
                removed = len(self._entries)
                self._entries.clear()
            else:
                keys = [k for k in self._entries if k[0] == app_identifier]
                for key in keys:
                    del self._entries[key]
                removed = len(keys)
        logger.debug(f"Cleared {removed} cache entries")
        return removed

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)
