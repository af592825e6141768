from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Protocol

from ..core.enums import RequestStatus

if TYPE_CHECKING:
    from ..assignments.repository import AssignmentRepository
    from ..leaves.repository import LeaveRequestRepository


class CommitmentLookup(Protocol):
    def has_commitment_after(self, *, collaborator_id: int, day: date) -> bool:
        """True if a confirmed shift or approved leave falls strictly after ``day``."""

        raise NotImplementedError


class ScheduledCommitments(CommitmentLookup):
    """Combines confirmed shift assignments and approved leave periods."""

    def __init__(self, assignments: "AssignmentRepository", leaves: "LeaveRequestRepository"):
        self._assignments = assignments
        self._leaves = leaves

    def has_commitment_after(self, *, collaborator_id: int, day: date) -> bool:
        if self._assignments.has_confirmed_after(collaborator_id=int(collaborator_id), day=day):
            return True
        return any(
            req.status == RequestStatus.APPROVED and req.end_date > day
            for req in self._leaves.list_by_collaborator(collaborator_id=int(collaborator_id))
        )
