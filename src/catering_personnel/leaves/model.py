from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..collaborators.model import Collaborator
from ..common.datetime_utils import inclusive_days, now_local
from ..core.enums import RequestStatus
from ..core.exceptions import InvalidStateTransition, OverlappingLeaveRequest, ValidationError


@dataclass(eq=False)
class LeaveRequest:
    """A leave period [start_date, end_date] asked for by one collaborator."""

    collaborator: Collaborator
    start_date: date
    end_date: date
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    request_id: Optional[int] = None

    @classmethod
    def create(
        cls,
        collaborator: Collaborator,
        start_date: date,
        end_date: date,
        *,
        existing: Iterable["LeaveRequest"] = (),
        now: Optional[datetime] = None,
    ) -> "LeaveRequest":
        if collaborator is None:
            raise ValidationError("Collaborator is required")
        if start_date is None or end_date is None:
            raise ValidationError("Start and end date are required")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        req = cls(
            collaborator=collaborator,
            start_date=start_date,
            end_date=end_date,
            status=RequestStatus.PENDING,
            created_at=now or now_local(),
        )
        req.ensure_no_approved_overlap(existing)
        return req

    @property
    def duration(self) -> int:
        return inclusive_days(self.start_date, self.end_date)

    def get_duration(self) -> int:
        return self.duration

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED

    def assign_id(self, request_id: int) -> None:
        if self.request_id is not None:
            raise ValidationError(f"Leave request already has id {self.request_id}")
        self.request_id = int(request_id)

    def overlaps(self, other: "LeaveRequest") -> bool:
        return self.start_date <= other.end_date and other.start_date <= self.end_date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def ensure_no_approved_overlap(self, others: Iterable["LeaveRequest"]) -> None:
        for other in others:
            if other is self:
                continue
            if self.request_id is not None and other.request_id == self.request_id:
                continue
            if other.is_approved and self.overlaps(other):
                raise OverlappingLeaveRequest(
                    f"{self.start_date:%Y-%m-%d}..{self.end_date:%Y-%m-%d} overlaps approved leave "
                    f"{other.start_date:%Y-%m-%d}..{other.end_date:%Y-%m-%d}"
                )

    def _decide(self, status: RequestStatus, decided_by: Optional[int], now: Optional[datetime]) -> None:
        if not self.is_pending:
            raise InvalidStateTransition(
                f"Leave request is already {self.status.value}; cannot move to {status.value}"
            )
        self.status = status
        self.decided_by = decided_by
        self.decided_at = now or now_local()

    def approve(self, *, decided_by: Optional[int] = None, now: Optional[datetime] = None) -> None:
        self._decide(RequestStatus.APPROVED, decided_by, now)

    def reject(self, *, decided_by: Optional[int] = None, now: Optional[datetime] = None) -> None:
        self._decide(RequestStatus.REJECTED, decided_by, now)
