from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date, datetime
from typing import Callable, Iterator, List, Optional, Sequence

from ..collaborators.commitments import CommitmentLookup
from ..collaborators.locks import CollaboratorLocks
from ..collaborators.model import Collaborator, ensure_contact_available
from ..collaborators.repository import CollaboratorRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_PENDING_LIMIT
from ..core.enums import Role
from ..core.exceptions import (
    ActiveAssignmentsExist,
    InsufficientVacationBalance,
    InvalidStateTransition,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRequestRepository
from ..performance.model import PerformanceNote
from ..performance.repository import PerformanceNoteRepository
from ..users.model import User
from .events import PersonnelEventReceiver

logger = logging.getLogger(__name__)


class PersonnelManager:
    """Use cases of "manage personnel".

    Every mutating call takes the acting user explicitly, checks its role
    before touching any entity, mutates under the collaborator's lock and then
    notifies the registered receivers. A receiver failure undoes the in-memory
    change and propagates.
    """

    def __init__(
        self,
        collaborators: CollaboratorRepository,
        leaves: LeaveRequestRepository,
        notes: PerformanceNoteRepository,
        commitments: CommitmentLookup,
        *,
        locks: Optional[CollaboratorLocks] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._collaborators = collaborators
        self._leaves = leaves
        self._notes = notes
        self._commitments = commitments
        self._locks = locks or CollaboratorLocks()
        self._clock = clock
        # Guards contact uniqueness across collaborators.
        self._registry_lock = threading.RLock()
        self._receivers: List[PersonnelEventReceiver] = []
        self._current_collaborator: Optional[Collaborator] = None

    # -------- Receivers --------
    def add_event_receiver(self, receiver: PersonnelEventReceiver) -> None:
        self._receivers.append(receiver)

    def remove_event_receiver(self, receiver: PersonnelEventReceiver) -> None:
        self._receivers.remove(receiver)

    def _notify(self, event: str, entity) -> None:
        for receiver in list(self._receivers):
            try:
                getattr(receiver, event)(entity)
            except Exception:
                logger.exception("%s failed in %s; rolling back", type(receiver).__name__, event)
                raise

    @contextmanager
    def _rollback_on_error(self, *entities) -> Iterator[None]:
        snapshots = [(entity, dict(vars(entity))) for entity in entities]
        try:
            yield
        except Exception:
            for entity, state in snapshots:
                vars(entity).update(state)
            raise

    # -------- Permissions --------
    @staticmethod
    def _require_user(actor: Optional[User]) -> User:
        if actor is None:
            raise PermissionDenied("Login required")
        return actor

    def _require_role(self, actor: Optional[User], role: Role, action: str) -> User:
        actor = self._require_user(actor)
        if not actor.has_role(role):
            logger.warning("User %s denied: %s requires %s", actor.username, action, role.value)
            raise PermissionDenied(f"Only {role.value}s can {action}", required_role=role)
        return actor

    def _require_owner(self, actor: Optional[User], action: str) -> User:
        return self._require_role(actor, Role.OWNER, action)

    def _require_organizer(self, actor: Optional[User], action: str) -> User:
        return self._require_role(actor, Role.ORGANIZER, action)

    def _today(self) -> date:
        return self._clock().date()

    def _refresh(self, collaborator: Collaborator) -> None:
        """Pull the stored status and vacation balance into ``collaborator``.

        Callers may hold a copy read before another decision moved the balance.
        """
        if collaborator.collaborator_id is None:
            return
        stored = self._collaborators.get_by_id(collaborator.collaborator_id)
        if stored is None:
            raise NotFound(f"Collaborator {collaborator.collaborator_id} does not exist")
        if stored is not collaborator:
            collaborator.status = stored.status
            collaborator.vacation_days = stored.vacation_days

    # -------- Queries --------
    @property
    def current_collaborator(self) -> Optional[Collaborator]:
        return self._current_collaborator

    def list_collaborators(self, *, actor: User, include_inactive: bool = False) -> Sequence[Collaborator]:
        self._require_user(actor)
        if include_inactive:
            return self._collaborators.list_all()
        return self._collaborators.list_active()

    def get_collaborator(self, *, actor: User, collaborator_id: int) -> Collaborator:
        self._require_user(actor)
        collaborator = self._collaborators.get_by_id(int(collaborator_id))
        if not collaborator:
            raise NotFound(f"Collaborator {collaborator_id} does not exist")
        return collaborator

    def get_collaborator_profile(self, *, actor: User, collaborator: Collaborator) -> Collaborator:
        """Show a full profile and make it the current collaborator."""
        self._require_user(actor)
        self._current_collaborator = collaborator
        return collaborator

    def get_leave_requests(self, *, actor: User, collaborator: Collaborator) -> Sequence[LeaveRequest]:
        self._require_user(actor)
        if collaborator.collaborator_id is None:
            return []
        return self._leaves.list_by_collaborator(
            collaborator_id=collaborator.collaborator_id, limit=DEFAULT_HISTORY_LIMIT
        )

    def get_pending_leave_requests(self, *, actor: User) -> Sequence[LeaveRequest]:
        self._require_user(actor)
        return self._leaves.list_pending(limit=DEFAULT_PENDING_LIMIT)

    def get_leave_request(self, *, actor: User, request_id: int) -> LeaveRequest:
        self._require_user(actor)
        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise NotFound(f"Leave request {request_id} does not exist")
        return req

    def get_performance_history(self, *, actor: User, collaborator: Collaborator) -> Sequence[PerformanceNote]:
        self._require_user(actor)
        if collaborator.collaborator_id is None:
            return []
        return self._notes.list_by_collaborator(
            collaborator_id=collaborator.collaborator_id, limit=DEFAULT_HISTORY_LIMIT
        )

    def get_event_performance_notes(self, *, actor: User, event_id: int) -> Sequence[PerformanceNote]:
        self._require_user(actor)
        return self._notes.list_by_event(event_id=int(event_id), limit=DEFAULT_HISTORY_LIMIT)

    def is_on_leave(self, *, actor: User, collaborator: Collaborator, day: date) -> bool:
        return any(
            req.is_approved and req.covers(day)
            for req in self.get_leave_requests(actor=actor, collaborator=collaborator)
        )

    # -------- Collaborator lifecycle --------
    def add_collaborator(self, *, actor: User, name: str, contact: str) -> Collaborator:
        self._require_owner(actor, "add collaborators")

        with self._registry_lock:
            collaborator = Collaborator.create(name, contact, existing=self._collaborators.list_active())
            self._notify("on_collaborator_added", collaborator)

        logger.info("Collaborator %s added by %s", collaborator.collaborator_id, actor.username)
        return collaborator

    def update_collaborator_info(
        self,
        *,
        actor: User,
        collaborator: Collaborator,
        name: Optional[str] = None,
        fiscal_code: Optional[str] = None,
        contact: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Collaborator:
        self._require_organizer(actor, "edit collaborator info")

        with self._registry_lock, self._locks.hold(collaborator):
            new_contact = optional_text(contact)
            if new_contact and collaborator.active:
                ensure_contact_available(
                    new_contact,
                    (c for c in self._collaborators.list_active() if c is not collaborator),
                    exclude_id=collaborator.collaborator_id,
                )
            with self._rollback_on_error(collaborator):
                collaborator.update_info(name=name, fiscal_code=fiscal_code, contact=contact, address=address)
                self._notify("on_collaborator_updated", collaborator)

        logger.info("Collaborator %s updated by %s", collaborator.collaborator_id, actor.username)
        return collaborator

    def remove_collaborator(self, *, actor: User, collaborator: Collaborator) -> Collaborator:
        """Soft delete: blocked while shifts or approved leave lie ahead."""
        self._require_organizer(actor, "remove collaborators")

        with self._locks.hold(collaborator):
            if not collaborator.active:
                raise InvalidStateTransition(f"Collaborator {collaborator.name} is already inactive")
            with self._rollback_on_error(collaborator):
                try:
                    collaborator.deactivate(commitments=self._commitments, today=self._today())
                except ActiveAssignmentsExist:
                    logger.warning("Cannot remove collaborator %s: future commitments", collaborator.collaborator_id)
                    raise
                self._notify("on_collaborator_removed", collaborator)

        logger.info("Collaborator %s deactivated by %s", collaborator.collaborator_id, actor.username)
        return collaborator

    def promote_collaborator(self, *, actor: User, collaborator: Collaborator) -> Collaborator:
        self._require_owner(actor, "promote collaborators")

        with self._locks.hold(collaborator):
            if not collaborator.occasional:
                raise InvalidStateTransition(f"Collaborator {collaborator.name} is already permanent")
            with self._rollback_on_error(collaborator):
                collaborator.promote()
                self._notify("on_collaborator_updated", collaborator)

        logger.info("Collaborator %s promoted by %s", collaborator.collaborator_id, actor.username)
        return collaborator

    def set_vacation_days(self, *, actor: User, collaborator: Collaborator, days: int) -> Collaborator:
        self._require_owner(actor, "set vacation balances")

        with self._locks.hold(collaborator):
            with self._rollback_on_error(collaborator):
                collaborator.set_vacation_days(days)
                self._notify("on_vacation_days_set", collaborator)

        logger.info(
            "Collaborator %s vacation balance set to %d by %s",
            collaborator.collaborator_id,
            collaborator.vacation_days,
            actor.username,
        )
        return collaborator

    # -------- Leave requests --------
    def request_leave(
        self,
        *,
        actor: User,
        collaborator: Collaborator,
        start_date: date,
        end_date: date,
    ) -> LeaveRequest:
        self._require_user(actor)
        if not collaborator.active:
            raise ValidationError(f"Collaborator {collaborator.name} is inactive")

        with self._locks.hold(collaborator):
            existing: Sequence[LeaveRequest] = ()
            if collaborator.collaborator_id is not None:
                existing = self._leaves.list_by_collaborator(collaborator_id=collaborator.collaborator_id)
            req = LeaveRequest.create(collaborator, start_date, end_date, existing=existing, now=self._clock())
            self._notify("on_leave_request_created", req)

        logger.info(
            "Leave request %s for collaborator %s (%d days)",
            req.request_id,
            collaborator.collaborator_id,
            req.duration,
        )
        return req

    def evaluate_leave_request(self, *, actor: User, request: LeaveRequest, approve: bool) -> LeaveRequest:
        actor = self._require_owner(actor, "evaluate leave requests")
        collaborator = request.collaborator

        with self._locks.hold(collaborator):
            if not request.is_pending:
                raise InvalidStateTransition(f"Leave request is already {request.status.value}")
            self._refresh(collaborator)

            with self._rollback_on_error(request, collaborator):
                if approve:
                    if not collaborator.active:
                        logger.warning(
                            "Leave request %s not approved: collaborator %s is inactive",
                            request.request_id,
                            collaborator.collaborator_id,
                        )
                        raise ValidationError(f"Collaborator {collaborator.name} is inactive")
                    duration = request.get_duration()
                    if collaborator.vacation_days < duration:
                        logger.warning(
                            "Leave request %s needs %d days, collaborator %s has %d",
                            request.request_id,
                            duration,
                            collaborator.collaborator_id,
                            collaborator.vacation_days,
                        )
                        raise InsufficientVacationBalance(requested=duration, available=collaborator.vacation_days)
                    if collaborator.collaborator_id is not None:
                        request.ensure_no_approved_overlap(
                            self._leaves.list_by_collaborator(collaborator_id=collaborator.collaborator_id)
                        )
                    collaborator.reduce_vacation_days(duration)
                    request.approve(decided_by=actor.user_id, now=self._clock())
                else:
                    request.reject(decided_by=actor.user_id, now=self._clock())
                self._notify("on_leave_request_updated", request)

        logger.info("Leave request %s %s by %s", request.request_id, request.status.value, actor.username)
        return request

    # -------- Performance --------
    def log_performance(
        self,
        *,
        actor: User,
        collaborator: Collaborator,
        text: str,
        event_id: Optional[int] = None,
    ) -> PerformanceNote:
        actor = self._require_organizer(actor, "log performance notes")

        note = PerformanceNote.create(collaborator, actor.user_id, text, event_id=event_id, now=self._clock())
        self._notify("on_performance_logged", note)

        logger.info("Performance note %s logged for collaborator %s", note.note_id, collaborator.collaborator_id)
        return note
