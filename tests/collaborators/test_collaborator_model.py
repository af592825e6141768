from datetime import date

import pytest

from catering_personnel.collaborators.model import Collaborator, ensure_contact_available
from catering_personnel.core.enums import CollaboratorStatus
from catering_personnel.core.exceptions import (
    ActiveAssignmentsExist,
    DuplicateContact,
    InsufficientVacationBalance,
    ValidationError,
)


class StubCommitments:
    def __init__(self, busy_ids=()):
        self.busy_ids = set(busy_ids)
        self.calls = []

    def has_commitment_after(self, *, collaborator_id: int, day: date) -> bool:
        self.calls.append((collaborator_id, day))
        return collaborator_id in self.busy_ids


def _saved(name="Anna", contact="anna@example.com", collaborator_id=7) -> Collaborator:
    c = Collaborator.create(name, contact)
    c.assign_id(collaborator_id)
    return c


def test_create_defaults_to_occasional_active_without_vacation():
    c = Collaborator.create("  Anna ", " anna@example.com ")

    assert c.name == "Anna"
    assert c.contact == "anna@example.com"
    assert c.occasional is True
    assert c.active is True
    assert c.status == CollaboratorStatus.ACTIVE
    assert c.vacation_days == 0
    assert c.collaborator_id is None


@pytest.mark.parametrize("name,contact", [("", "x@example.com"), ("Anna", "   "), (None, "x@example.com")])
def test_create_requires_name_and_contact(name, contact):
    with pytest.raises(ValidationError):
        Collaborator.create(name, contact)


def test_create_rejects_contact_held_by_active_collaborator_case_insensitively():
    holder = _saved(contact="Anna@Example.com")

    with pytest.raises(DuplicateContact) as exc:
        Collaborator.create("Other", " anna@example.COM", existing=[holder])

    assert exc.value.contact == "anna@example.COM"


def test_contact_of_inactive_collaborator_is_free_again():
    holder = _saved()
    holder.deactivate(commitments=StubCommitments(), today=date(2024, 1, 1))

    ensure_contact_available("anna@example.com", [holder])


def test_ensure_contact_available_skips_excluded_id():
    holder = _saved(collaborator_id=3)

    ensure_contact_available("anna@example.com", [holder], exclude_id=3)


def test_assign_id_only_once():
    c = _saved(collaborator_id=1)

    with pytest.raises(ValidationError):
        c.assign_id(2)
    assert c.collaborator_id == 1


def test_update_info_only_overwrites_non_empty_values():
    c = _saved()
    c.update_info(name="Anna Rossi", fiscal_code="  ", contact=None, address=" Via Roma 1 ")

    assert c.name == "Anna Rossi"
    assert c.fiscal_code is None
    assert c.contact == "anna@example.com"
    assert c.address == "Via Roma 1"


def test_promote_is_idempotent():
    c = _saved()
    c.promote()
    c.promote()

    assert c.occasional is False


def test_reduce_vacation_days_within_balance():
    c = _saved()
    c.set_vacation_days(10)
    c.reduce_vacation_days(10)

    assert c.vacation_days == 0


def test_reduce_vacation_days_over_balance_keeps_balance():
    c = _saved()
    c.set_vacation_days(3)

    with pytest.raises(InsufficientVacationBalance) as exc:
        c.reduce_vacation_days(4)

    assert exc.value.requested == 4
    assert exc.value.available == 3
    assert c.vacation_days == 3


def test_set_vacation_days_rejects_negative():
    c = _saved()
    with pytest.raises(ValidationError):
        c.set_vacation_days(-1)
    assert c.vacation_days == 0


def test_deactivate_blocked_by_future_commitment():
    c = _saved(collaborator_id=5)
    commitments = StubCommitments(busy_ids={5})

    with pytest.raises(ActiveAssignmentsExist):
        c.deactivate(commitments=commitments, today=date(2024, 1, 1))

    assert c.active is True
    assert commitments.calls == [(5, date(2024, 1, 1))]


def test_deactivate_only_changes_status():
    c = _saved()
    c.set_vacation_days(4)
    c.promote()
    before = dict(vars(c))

    c.deactivate(commitments=StubCommitments(), today=date(2024, 1, 1))

    after = dict(vars(c))
    assert after.pop("status") == CollaboratorStatus.INACTIVE
    before.pop("status")
    assert after == before


def test_unsaved_collaborator_has_no_commitments():
    c = Collaborator.create("Anna", "anna@example.com")

    assert c.has_active_assignments(StubCommitments(busy_ids={None}), today=date(2024, 1, 1)) is False
