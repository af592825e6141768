from __future__ import annotations

from datetime import date

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import AssignmentRepository


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_confirmed_after(self, *, collaborator_id: int, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt
                FROM shift_assignments
                WHERE collaborator_id=%s AND confirmed=1 AND work_date > %s
                """,
                (int(collaborator_id), day),
            )
            r = fetchone(cur)
            return bool(r and int(r["cnt"]) > 0)
