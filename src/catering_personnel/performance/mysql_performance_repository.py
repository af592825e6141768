from __future__ import annotations

from typing import Sequence

from ..collaborators.mysql_collaborator_repository import row_to_collaborator
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import PerformanceNote
from .repository import PerformanceNoteRepository

_SELECT = """
    SELECT n.note_id, n.event_id, n.author_id, n.note, n.created_at,
           c.collaborator_id AS c_collaborator_id, c.name AS c_name, c.contact AS c_contact,
           c.fiscal_code AS c_fiscal_code, c.address AS c_address,
           c.occasional AS c_occasional, c.status AS c_status,
           c.vacation_days AS c_vacation_days, c.user_id AS c_user_id
    FROM performance_notes n
    JOIN collaborators c ON c.collaborator_id = n.collaborator_id
"""


class MySQLPerformanceNoteRepository(PerformanceNoteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, note: PerformanceNote) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO performance_notes(collaborator_id, event_id, author_id, note, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(note.collaborator.collaborator_id),
                    note.event_id,
                    int(note.author_id),
                    note.text,
                    note.created_at,
                ),
            )
            return int(cur.lastrowid)

    def _list(self, where: str, params: tuple) -> Sequence[PerformanceNote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY n.created_at DESC LIMIT %s", params)
            collaborators: dict = {}
            out: list[PerformanceNote] = []
            for r in fetchall(cur):
                cid = int(r["c_collaborator_id"])
                if cid not in collaborators:
                    collaborators[cid] = row_to_collaborator(r, prefix="c_")
                out.append(
                    PerformanceNote(
                        note_id=int(r["note_id"]),
                        collaborator=collaborators[cid],
                        author_id=int(r["author_id"]),
                        text=r["note"],
                        created_at=r["created_at"],
                        event_id=r.get("event_id"),
                    )
                )
            return out

    def list_by_collaborator(self, *, collaborator_id: int, limit: int = 200) -> Sequence[PerformanceNote]:
        return self._list("n.collaborator_id=%s", (int(collaborator_id), int(limit)))

    def list_by_event(self, *, event_id: int, limit: int = 200) -> Sequence[PerformanceNote]:
        return self._list("n.event_id=%s", (int(event_id), int(limit)))
