from __future__ import annotations

from datetime import date
from typing import Protocol


class AssignmentRepository(Protocol):
    """Read-only view onto the scheduling subsystem's shift assignments."""

    def has_confirmed_after(self, *, collaborator_id: int, day: date) -> bool:
        raise NotImplementedError
