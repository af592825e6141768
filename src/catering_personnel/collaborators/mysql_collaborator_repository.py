from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import CollaboratorStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Collaborator
from .repository import CollaboratorRepository

_COLUMNS = """
    collaborator_id, name, contact, fiscal_code, address,
    occasional, status, vacation_days, user_id
"""


def row_to_collaborator(r: dict, *, prefix: str = "") -> Collaborator:
    return Collaborator(
        collaborator_id=int(r[f"{prefix}collaborator_id"]),
        name=r[f"{prefix}name"],
        contact=r[f"{prefix}contact"],
        fiscal_code=r.get(f"{prefix}fiscal_code"),
        address=r.get(f"{prefix}address"),
        occasional=as_bool(r[f"{prefix}occasional"]),
        status=CollaboratorStatus(r[f"{prefix}status"]),
        vacation_days=int(r[f"{prefix}vacation_days"]),
        user_id=r.get(f"{prefix}user_id"),
    )


class MySQLCollaboratorRepository(CollaboratorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, collaborator: Collaborator) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO collaborators(
                    name, contact, fiscal_code, address, occasional, status, vacation_days, user_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    collaborator.name,
                    collaborator.contact,
                    collaborator.fiscal_code,
                    collaborator.address,
                    1 if collaborator.occasional else 0,
                    collaborator.status.value,
                    int(collaborator.vacation_days),
                    collaborator.user_id,
                ),
            )
            return int(cur.lastrowid)

    @staticmethod
    def _exists(cur, collaborator_id: int) -> bool:
        cur.execute(
            "SELECT 1 AS found FROM collaborators WHERE collaborator_id=%s",
            (int(collaborator_id),),
        )
        return fetchone(cur) is not None

    def update(self, collaborator: Collaborator) -> bool:
        # vacation_days is left alone: it only moves through update_vacation_days
        # and the leave decision transaction.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE collaborators
                SET name=%s, contact=%s, fiscal_code=%s, address=%s,
                    occasional=%s, status=%s, user_id=%s
                WHERE collaborator_id=%s
                """,
                (
                    collaborator.name,
                    collaborator.contact,
                    collaborator.fiscal_code,
                    collaborator.address,
                    1 if collaborator.occasional else 0,
                    collaborator.status.value,
                    collaborator.user_id,
                    int(collaborator.collaborator_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed; check existence instead.
            return cur.rowcount > 0 or self._exists(cur, collaborator.collaborator_id)

    def update_vacation_days(self, collaborator: Collaborator) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE collaborators SET vacation_days=%s WHERE collaborator_id=%s",
                (int(collaborator.vacation_days), int(collaborator.collaborator_id)),
            )
            return cur.rowcount > 0 or self._exists(cur, collaborator.collaborator_id)

    def get_by_id(self, collaborator_id: int) -> Optional[Collaborator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM collaborators WHERE collaborator_id=%s",
                (int(collaborator_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return row_to_collaborator(r)

    def list_active(self) -> Sequence[Collaborator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM collaborators WHERE status=%s ORDER BY name",
                (CollaboratorStatus.ACTIVE.value,),
            )
            return [row_to_collaborator(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Collaborator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM collaborators ORDER BY name")
            return [row_to_collaborator(r) for r in fetchall(cur)]
