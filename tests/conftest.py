from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from catering_personnel.collaborators.commitments import ScheduledCommitments
from catering_personnel.collaborators.model import Collaborator
from catering_personnel.core.enums import RequestStatus, Role
from catering_personnel.leaves.model import LeaveRequest
from catering_personnel.performance.model import PerformanceNote
from catering_personnel.personnel.manager import PersonnelManager
from catering_personnel.personnel.persistence import PersonnelPersistence
from catering_personnel.users.model import User

FIXED_NOW = datetime(2023, 12, 15, 10, 0, 0)


class InMemoryCollaborators:
    def __init__(self):
        self.by_id: dict[int, Collaborator] = {}
        self._id = 0

    def save(self, collaborator: Collaborator) -> int:
        self._id += 1
        self.by_id[self._id] = collaborator
        return self._id

    def update(self, collaborator: Collaborator) -> bool:
        return collaborator.collaborator_id in self.by_id

    def update_vacation_days(self, collaborator: Collaborator) -> bool:
        return collaborator.collaborator_id in self.by_id

    def get_by_id(self, collaborator_id: int) -> Optional[Collaborator]:
        return self.by_id.get(collaborator_id)

    def list_active(self):
        return [c for c in self.by_id.values() if c.active]

    def list_all(self):
        return list(self.by_id.values())


class InMemoryLeaves:
    def __init__(self):
        self.by_id: dict[int, LeaveRequest] = {}
        self.decided: set[int] = set()
        self._id = 0

    def save(self, request: LeaveRequest) -> int:
        self._id += 1
        self.by_id[self._id] = request
        return self._id

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        return self.by_id.get(request_id)

    def list_by_collaborator(self, *, collaborator_id: int, limit: int = 200):
        items = [r for r in self.by_id.values() if r.collaborator.collaborator_id == collaborator_id]
        items.sort(key=lambda r: r.start_date, reverse=True)
        return items[:limit]

    def list_pending(self, *, limit: int = 500):
        return [r for r in self.by_id.values() if r.status == RequestStatus.PENDING][:limit]

    def record_decision(self, request: LeaveRequest) -> bool:
        if request.request_id in self.decided:
            return False
        self.decided.add(request.request_id)
        return True


class InMemoryNotes:
    def __init__(self):
        self.notes: list[PerformanceNote] = []

    def save(self, note: PerformanceNote) -> int:
        self.notes.append(note)
        return len(self.notes)

    def list_by_collaborator(self, *, collaborator_id: int, limit: int = 200):
        items = [n for n in self.notes if n.collaborator.collaborator_id == collaborator_id]
        return list(reversed(items))[:limit]

    def list_by_event(self, *, event_id: int, limit: int = 200):
        return [n for n in self.notes if n.event_id == event_id][:limit]


class InMemoryAssignments:
    """Confirmed shift days per collaborator."""

    def __init__(self):
        self.confirmed: dict[int, list[date]] = {}

    def confirm(self, collaborator_id: int, work_date: date) -> None:
        self.confirmed.setdefault(collaborator_id, []).append(work_date)

    def has_confirmed_after(self, *, collaborator_id: int, day: date) -> bool:
        return any(d > day for d in self.confirmed.get(collaborator_id, []))


class RecordingReceiver:
    def __init__(self, name: str = "recorder", log: Optional[list] = None, fail_on: Optional[str] = None):
        self.name = name
        self.log = log if log is not None else []
        self.fail_on = fail_on

    def _record(self, event: str, entity) -> None:
        self.log.append((self.name, event, entity))
        if event == self.fail_on:
            raise RuntimeError(f"{self.name} failed on {event}")

    def on_collaborator_added(self, collaborator):
        self._record("on_collaborator_added", collaborator)

    def on_collaborator_updated(self, collaborator):
        self._record("on_collaborator_updated", collaborator)

    def on_vacation_days_set(self, collaborator):
        self._record("on_vacation_days_set", collaborator)

    def on_collaborator_removed(self, collaborator):
        self._record("on_collaborator_removed", collaborator)

    def on_leave_request_created(self, request):
        self._record("on_leave_request_created", request)

    def on_leave_request_updated(self, request):
        self._record("on_leave_request_updated", request)

    def on_performance_logged(self, note):
        self._record("on_performance_logged", note)


@pytest.fixture
def owner() -> User:
    return User(user_id=1, username="owner", roles=frozenset({Role.OWNER}))


@pytest.fixture
def organizer() -> User:
    return User(user_id=2, username="organizer", roles=frozenset({Role.ORGANIZER}))


@pytest.fixture
def cook() -> User:
    return User(user_id=3, username="cook", roles=frozenset({Role.COOK}))


@pytest.fixture
def collaborators_repo() -> InMemoryCollaborators:
    return InMemoryCollaborators()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def notes_repo() -> InMemoryNotes:
    return InMemoryNotes()


@pytest.fixture
def assignments_repo() -> InMemoryAssignments:
    return InMemoryAssignments()


@pytest.fixture
def manager(collaborators_repo, leaves_repo, notes_repo, assignments_repo) -> PersonnelManager:
    mgr = PersonnelManager(
        collaborators_repo,
        leaves_repo,
        notes_repo,
        ScheduledCommitments(assignments_repo, leaves_repo),
        clock=lambda: FIXED_NOW,
    )
    mgr.add_event_receiver(PersonnelPersistence(collaborators_repo, leaves_repo, notes_repo))
    return mgr


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_receiver():
    return RecordingReceiver
