from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def save(self, request: LeaveRequest) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        """Return the request with its collaborator resolved."""

        raise NotImplementedError

    def list_by_collaborator(self, *, collaborator_id: int, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_pending(self, *, limit: int = 500) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def record_decision(self, request: LeaveRequest) -> bool:
        """Persist an approve/reject decision and, on approval, the balance deduction.

        Both writes happen in one transaction. Returns False when the stored
        request is no longer pending or the stored balance cannot cover it.
        """

        raise NotImplementedError
