"""Advisory per-object locks for caller-owned roots."""

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List


class AdvisoryLockRegistry:
    """
    Hands out one re-entrant lock per live object.

    Locks are keyed by object identity, so unhashable roots such as dicts
    and lists can be locked. An entry exists only while some thread holds
    or waits on it, which keeps identities of collected objects from being
    confused with new ones.
    """

    def __init__(self):
        self._mutex = threading.Lock()
        self._entries: Dict[int, List[Any]] = {}

    @contextmanager
    def hold(self, obj: Any) -> Iterator[None]:
        """
        Hold the advisory lock of obj for the duration of the block.

        Args:
            obj: Caller-supplied root object
        """
        key = id(obj)
        with self._mutex:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.RLock(), 0]
                self._entries[key] = entry
            entry[1] += 1

        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._mutex:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def active_count(self) -> int:
        """Number of objects currently locked or waited on."""
        with self._mutex:
            return len(self._entries)
