from __future__ import annotations

from typing import Protocol

from ..collaborators.model import Collaborator
from ..leaves.model import LeaveRequest
from ..performance.model import PerformanceNote


class PersonnelEventReceiver(Protocol):
    """Receives one call per successful PersonnelManager mutation.

    Receivers run synchronously, in registration order. An exception raised
    here propagates to the caller and the mutation is undone in memory.
    """

    def on_collaborator_added(self, collaborator: Collaborator) -> None:
        raise NotImplementedError

    def on_collaborator_updated(self, collaborator: Collaborator) -> None:
        """Info change or promotion; the vacation balance is not part of it."""

        raise NotImplementedError

    def on_vacation_days_set(self, collaborator: Collaborator) -> None:
        """The owner overwrote the vacation balance."""

        raise NotImplementedError

    def on_collaborator_removed(self, collaborator: Collaborator) -> None:
        """Soft delete: the collaborator is now INACTIVE."""

        raise NotImplementedError

    def on_leave_request_created(self, request: LeaveRequest) -> None:
        raise NotImplementedError

    def on_leave_request_updated(self, request: LeaveRequest) -> None:
        """Approved or rejected; ``request.collaborator`` carries the new balance."""

        raise NotImplementedError

    def on_performance_logged(self, note: PerformanceNote) -> None:
        raise NotImplementedError
