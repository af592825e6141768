from catering_personnel.collaborators.locks import CollaboratorLocks
from catering_personnel.collaborators.model import Collaborator


def _saved(collaborator_id: int) -> Collaborator:
    c = Collaborator.create("Pia", "pia@example.com")
    c.assign_id(collaborator_id)
    return c


def test_copies_of_one_record_share_a_lock():
    locks = CollaboratorLocks()

    assert locks.lock_for(_saved(4)) is locks.lock_for(_saved(4))
    assert locks.lock_for(_saved(4)) is not locks.lock_for(_saved(5))


def test_unsaved_collaborators_share_one_lock():
    locks = CollaboratorLocks()
    a = Collaborator.create("Pia", "pia@example.com")
    b = Collaborator.create("Ugo", "ugo@example.com")

    assert locks.lock_for(a) is locks.lock_for(b)
    assert len(locks) == 0


def test_released_locks_are_dropped():
    locks = CollaboratorLocks()
    c = _saved(9)

    with locks.hold(c):
        assert len(locks) == 1

    assert len(locks) == 0
