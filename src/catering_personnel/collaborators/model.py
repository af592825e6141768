from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import today_local
from ..common.validators import optional_text, require_non_empty, require_non_negative
from ..core.enums import CollaboratorStatus
from ..core.exceptions import (
    ActiveAssignmentsExist,
    DuplicateContact,
    InsufficientVacationBalance,
    ValidationError,
)
from .commitments import CommitmentLookup


def normalize_contact(contact: str) -> str:
    return (contact or "").strip().casefold()


def ensure_contact_available(
    contact: str,
    others: Iterable["Collaborator"],
    *,
    exclude_id: Optional[int] = None,
) -> None:
    """Raise DuplicateContact if an active collaborator already holds ``contact``.

    ``exclude_id`` skips the collaborator being edited.
    """
    wanted = normalize_contact(contact)
    for other in others:
        if exclude_id is not None and other.collaborator_id == exclude_id:
            continue
        if other.active and normalize_contact(other.contact) == wanted:
            raise DuplicateContact(contact.strip())


@dataclass(eq=False)
class Collaborator:
    """Domain entity: a staff member, permanent or occasional.

    Note: entity methods only change in-memory state; persistence happens
    through the receivers notified by PersonnelManager.
    """

    name: str
    contact: str
    fiscal_code: Optional[str] = None
    address: Optional[str] = None
    occasional: bool = True
    status: CollaboratorStatus = CollaboratorStatus.ACTIVE
    vacation_days: int = 0
    user_id: Optional[int] = None
    collaborator_id: Optional[int] = None

    @classmethod
    def create(
        cls,
        name: str,
        contact: str,
        *,
        existing: Iterable["Collaborator"] = (),
    ) -> "Collaborator":
        name = require_non_empty(name, "Name")
        contact = require_non_empty(contact, "Contact")
        ensure_contact_available(contact, existing)
        return cls(name=name, contact=contact)

    @property
    def active(self) -> bool:
        return self.status == CollaboratorStatus.ACTIVE

    def assign_id(self, collaborator_id: int) -> None:
        if self.collaborator_id is not None:
            raise ValidationError(f"Collaborator already has id {self.collaborator_id}")
        self.collaborator_id = int(collaborator_id)

    def update_info(
        self,
        name: Optional[str] = None,
        fiscal_code: Optional[str] = None,
        contact: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        name = optional_text(name)
        fiscal_code = optional_text(fiscal_code)
        contact = optional_text(contact)
        address = optional_text(address)

        if name:
            self.name = name
        if fiscal_code:
            self.fiscal_code = fiscal_code
        if contact:
            self.contact = contact
        if address:
            self.address = address

    def promote(self) -> None:
        self.occasional = False

    def has_active_assignments(self, commitments: CommitmentLookup, *, today: Optional[date] = None) -> bool:
        if self.collaborator_id is None:
            return False
        day = today or today_local()
        return commitments.has_commitment_after(collaborator_id=self.collaborator_id, day=day)

    def deactivate(self, *, commitments: CommitmentLookup, today: Optional[date] = None) -> None:
        if self.has_active_assignments(commitments, today=today):
            raise ActiveAssignmentsExist(
                f"Collaborator {self.name} has shifts or leave scheduled after today"
            )
        self.status = CollaboratorStatus.INACTIVE

    def set_vacation_days(self, days: int) -> None:
        self.vacation_days = require_non_negative(days, "Vacation days")

    def reduce_vacation_days(self, days: int) -> None:
        days = require_non_negative(days, "Vacation days")
        if days > self.vacation_days:
            raise InsufficientVacationBalance(requested=days, available=self.vacation_days)
        self.vacation_days -= days

    def __str__(self) -> str:
        tier = "occasional" if self.occasional else "permanent"
        return f"{self.name} <{self.contact}> ({tier}, {self.status.value.lower()})"
