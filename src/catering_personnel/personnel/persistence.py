from __future__ import annotations

import logging

from ..collaborators.model import Collaborator
from ..collaborators.repository import CollaboratorRepository
from ..core.exceptions import NotFound, PersistenceConflict
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRequestRepository
from ..performance.model import PerformanceNote
from ..performance.repository import PerformanceNoteRepository
from .events import PersonnelEventReceiver

logger = logging.getLogger(__name__)


class PersonnelPersistence(PersonnelEventReceiver):
    """Writes every personnel event through the repositories."""

    def __init__(
        self,
        collaborators: CollaboratorRepository,
        leaves: LeaveRequestRepository,
        notes: PerformanceNoteRepository,
    ):
        self._collaborators = collaborators
        self._leaves = leaves
        self._notes = notes

    def on_collaborator_added(self, collaborator: Collaborator) -> None:
        collaborator.assign_id(self._collaborators.save(collaborator))
        logger.debug("Saved collaborator %s", collaborator.collaborator_id)

    def _update(self, collaborator: Collaborator) -> None:
        if not self._collaborators.update(collaborator):
            raise NotFound(f"Collaborator {collaborator.collaborator_id} does not exist")

    def on_collaborator_updated(self, collaborator: Collaborator) -> None:
        self._update(collaborator)

    def on_vacation_days_set(self, collaborator: Collaborator) -> None:
        if not self._collaborators.update_vacation_days(collaborator):
            raise NotFound(f"Collaborator {collaborator.collaborator_id} does not exist")

    def on_collaborator_removed(self, collaborator: Collaborator) -> None:
        # Soft delete is a plain update of the status column.
        self._update(collaborator)

    def on_leave_request_created(self, request: LeaveRequest) -> None:
        request.assign_id(self._leaves.save(request))
        logger.debug("Saved leave request %s", request.request_id)

    def on_leave_request_updated(self, request: LeaveRequest) -> None:
        if not self._leaves.record_decision(request):
            raise PersistenceConflict(
                f"Leave request {request.request_id} was decided elsewhere or the stored balance is too low"
            )

    def on_performance_logged(self, note: PerformanceNote) -> None:
        note.assign_id(self._notes.save(note))
