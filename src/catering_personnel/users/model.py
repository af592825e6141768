from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """The acting system user, as resolved by the identity provider.

    Note: Passed explicitly into every PersonnelManager call; this package
    never looks up a "current user" on its own.
    """

    user_id: int
    username: str
    roles: FrozenSet[Role] = field(default_factory=frozenset)

    def is_owner(self) -> bool:
        return Role.OWNER in self.roles

    def is_organizer(self) -> bool:
        # Owner implies Organizer.
        return Role.ORGANIZER in self.roles or self.is_owner()

    def has_role(self, role: Role) -> bool:
        if role == Role.ORGANIZER:
            return self.is_organizer()
        return role in self.roles
