from __future__ import annotations

from typing import Optional

from .enums import Role


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PermissionDenied(DomainError):
    """Raised when the acting user lacks the role an operation requires."""

    def __init__(self, message: str, *, required_role: Optional[Role] = None):
        super().__init__(message)
        self.required_role = required_role


class NotFound(DomainError):
    """Raised when an identity lookup misses."""


class DuplicateContact(DomainError):
    """Raised when a contact is already held by another active collaborator."""

    def __init__(self, contact: str):
        super().__init__(f"Contact already in use by an active collaborator: {contact}")
        self.contact = contact


class InsufficientVacationBalance(DomainError):
    def __init__(self, *, requested: int, available: int):
        super().__init__(
            f"Insufficient vacation balance: requested {requested} days, available {available}"
        )
        self.requested = requested
        self.available = available


class ActiveAssignmentsExist(DomainError):
    """Raised when deactivation is blocked by future commitments."""


class OverlappingLeaveRequest(DomainError):
    """Raised when a leave period intersects an approved one."""


class InvalidStateTransition(DomainError):
    """Raised when a lifecycle transition is not allowed from the current state."""


class PersistenceConflict(DomainError):
    """Raised when the stored row no longer matches what a write expected."""
