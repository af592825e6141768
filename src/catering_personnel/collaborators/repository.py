from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Collaborator


class CollaboratorRepository(Protocol):
    """Repository interface for Collaborator.

    Note (DIP): PersonnelManager depends on this interface, never on a concrete DB.
    """

    def save(self, collaborator: Collaborator) -> int:
        """Insert a new row and return its id."""

        raise NotImplementedError

    def update(self, collaborator: Collaborator) -> bool:
        """Replace the descriptive and status columns keyed by collaborator_id.

        The vacation balance is not written here.
        """

        raise NotImplementedError

    def update_vacation_days(self, collaborator: Collaborator) -> bool:
        """Overwrite only the stored vacation balance."""

        raise NotImplementedError

    def get_by_id(self, collaborator_id: int) -> Optional[Collaborator]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Collaborator]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Collaborator]:
        raise NotImplementedError
