from __future__ import annotations

from typing import Optional, Sequence

from ..collaborators.mysql_collaborator_repository import row_to_collaborator
from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_SELECT = """
    SELECT r.request_id, r.start_date, r.end_date, r.status, r.created_at,
           r.decided_by, r.decided_at,
           c.collaborator_id AS c_collaborator_id, c.name AS c_name, c.contact AS c_contact,
           c.fiscal_code AS c_fiscal_code, c.address AS c_address,
           c.occasional AS c_occasional, c.status AS c_status,
           c.vacation_days AS c_vacation_days, c.user_id AS c_user_id
    FROM leave_requests r
    JOIN collaborators c ON c.collaborator_id = r.collaborator_id
"""


class _RollbackDecision(Exception):
    """Aborts the decision transaction so db_cursor rolls it back."""


def _row_to_request(r: dict, collaborators: dict) -> LeaveRequest:
    # Requests of the same collaborator share one Collaborator object.
    cid = int(r["c_collaborator_id"])
    collaborator = collaborators.get(cid)
    if collaborator is None:
        collaborator = row_to_collaborator(r, prefix="c_")
        collaborators[cid] = collaborator
    return LeaveRequest(
        request_id=int(r["request_id"]),
        collaborator=collaborator,
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, request: LeaveRequest) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(collaborator_id, start_date, end_date, status, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(request.collaborator.collaborator_id),
                    request.start_date,
                    request.end_date,
                    request.status.value,
                    request.created_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            if not r:
                return None
            return _row_to_request(r, {})

    def list_by_collaborator(self, *, collaborator_id: int, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE r.collaborator_id=%s ORDER BY r.created_at DESC LIMIT %s",
                (int(collaborator_id), int(limit)),
            )
            shared: dict = {}
            return [_row_to_request(r, shared) for r in fetchall(cur)]

    def list_pending(self, *, limit: int = 500) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE r.status=%s ORDER BY r.created_at DESC LIMIT %s",
                (RequestStatus.PENDING.value, int(limit)),
            )
            shared: dict = {}
            return [_row_to_request(r, shared) for r in fetchall(cur)]

    def record_decision(self, request: LeaveRequest) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE leave_requests
                    SET status=%s, decided_by=%s, decided_at=%s
                    WHERE request_id=%s AND status=%s
                    """,
                    (
                        request.status.value,
                        request.decided_by,
                        request.decided_at,
                        int(request.request_id),
                        RequestStatus.PENDING.value,
                    ),
                )
                if cur.rowcount == 0:
                    raise _RollbackDecision()

                if request.status == RequestStatus.APPROVED:
                    days = request.duration
                    cur.execute(
                        """
                        UPDATE collaborators
                        SET vacation_days = vacation_days - %s
                        WHERE collaborator_id=%s AND vacation_days >= %s
                        """,
                        (int(days), int(request.collaborator.collaborator_id), int(days)),
                    )
                    if cur.rowcount == 0:
                        raise _RollbackDecision()
        except _RollbackDecision:
            return False
        return True
