from __future__ import annotations

from typing import Protocol, Sequence

from .model import PerformanceNote


class PerformanceNoteRepository(Protocol):
    def save(self, note: PerformanceNote) -> int:
        raise NotImplementedError

    def list_by_collaborator(self, *, collaborator_id: int, limit: int = 200) -> Sequence[PerformanceNote]:
        """Newest first."""

        raise NotImplementedError

    def list_by_event(self, *, event_id: int, limit: int = 200) -> Sequence[PerformanceNote]:
        raise NotImplementedError
