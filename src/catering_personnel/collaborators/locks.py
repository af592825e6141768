from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator

from .model import Collaborator


class CollaboratorLocks:
    """One re-entrant lock per saved collaborator id.

    Serializes read-modify-write sequences on a single record (balance
    deduction, commitment check + deactivation) inside this process.
    Copies of the same record map to the same lock. Unsaved collaborators
    share a single lock. A per-id lock lives only as long as some caller
    references it.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[int, threading.RLock]" = weakref.WeakValueDictionary()
        self._unsaved = threading.RLock()
        self._guard = threading.Lock()

    def lock_for(self, collaborator: Collaborator) -> threading.RLock:
        if collaborator.collaborator_id is None:
            return self._unsaved
        key = int(collaborator.collaborator_id)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)

    @contextmanager
    def hold(self, collaborator: Collaborator) -> Iterator[None]:
        lock = self.lock_for(collaborator)
        with lock:
            yield
