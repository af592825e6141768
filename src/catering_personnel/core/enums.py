from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles recognised by the personnel permission checks."""

    OWNER = "owner"
    ORGANIZER = "organizer"
    COOK = "cook"


class CollaboratorStatus(str, Enum):
    """Lifecycle status; INACTIVE is a soft delete."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class RequestStatus(str, Enum):
    """Approval state of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
