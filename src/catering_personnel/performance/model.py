from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..collaborators.model import Collaborator
from ..common.datetime_utils import now_local
from ..core.exceptions import ValidationError


@dataclass(eq=False)
class PerformanceNote:
    """Free-text evaluation of a collaborator, optionally tied to an event.

    There is no update path: once logged a note only ever gets its id.
    """

    collaborator: Collaborator
    author_id: int
    text: str
    created_at: datetime
    event_id: Optional[int] = None
    note_id: Optional[int] = None

    @classmethod
    def create(
        cls,
        collaborator: Collaborator,
        author_id: int,
        text: str,
        *,
        event_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> "PerformanceNote":
        if collaborator is None:
            raise ValidationError("Collaborator is required")
        if author_id is None:
            raise ValidationError("Author is required")
        return cls(
            collaborator=collaborator,
            author_id=int(author_id),
            text=text,
            created_at=now or now_local(),
            event_id=event_id,
        )

    def assign_id(self, note_id: int) -> None:
        if self.note_id is not None:
            raise ValidationError(f"Performance note already has id {self.note_id}")
        self.note_id = int(note_id)

    def preview(self, width: int = 50) -> str:
        text = self.text or ""
        return text if len(text) <= width else text[:width] + "..."
