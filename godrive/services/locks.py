"""
In-process mutual exclusion keyed by entity.

The ride service holds these for the whole read-validate-mutate-persist
sequence of an operation, so two threads working on the same ride or
account cannot interleave and lose an update. Keys are acquired in sorted
order to avoid lock-order deadlocks; locks are re-entrant so a thread may
nest scopes. A key's lock is dropped once no scope references it.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


def ride_key(ride_id: str) -> str:
    return f"ride:{ride_id}"


def user_key(user_id: str) -> str:
    return f"user:{user_id}" if user_id else ""


class _Entry:
    __slots__ = ("lock", "refs")

    def __init__(self):
        self.lock = threading.RLock()
        self.refs = 0


class LockRegistry:
    def __init__(self):
        self._entries: Dict[str, _Entry] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        """Number of keys currently referenced by a scope."""
        with self._guard:
            return len(self._entries)

    def _checkout(self, key: str) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.refs += 1
            return entry

    def _checkin(self, key: str, entry: _Entry) -> None:
        with self._guard:
            entry.refs -= 1
            if entry.refs == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, *keys: str) -> Iterator[List[str]]:
        """Hold the locks for every non-empty key until the block exits.

        Yields the keys in the order they were acquired.
        """
        ordered = sorted({k for k in keys if k})
        held = []
        try:
            for key in ordered:
                entry = self._checkout(key)
                entry.lock.acquire()
                held.append((key, entry))
            yield [key for key, _ in held]
        finally:
            for key, entry in reversed(held):
                entry.lock.release()
                self._checkin(key, entry)
