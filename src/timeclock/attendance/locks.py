from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class UserLocks:
    """One mutex per user id.

    Operations for the same user serialize; different users never contend
    beyond the brief registry lookup.
    """

    def __init__(self):
        self._registry_lock = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, user_id: int) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        lock = self._lock_for(int(user_id))
        with lock:
            yield
