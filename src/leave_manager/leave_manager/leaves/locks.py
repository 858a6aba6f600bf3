from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator


class EmployeeLocks:
    """One lock per employee around validate-then-persist sequences.

    With `enabled=False` the guard is a no-op, which reproduces the plain
    read-then-write behaviour where two concurrent submissions may both pass
    validation.
    """

    def __init__(self, *, enabled: bool = True):
        self._enabled = bool(enabled)
        self._guard = threading.Lock()
        # Entries live only while some caller holds or waits on the lock.
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()

    def __len__(self) -> int:
        return len(self._locks)

    def _lock_for(self, employee_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[employee_id] = lock
            return lock

    @contextmanager
    def hold(self, employee_id: str) -> Iterator[None]:
        if not self._enabled:
            yield
            return
        lock = self._lock_for(str(employee_id))
        with lock:
            yield
