from __future__ import annotations

from dataclasses import dataclass

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .collaborators.commitments import ScheduledCommitments
from .collaborators.mysql_collaborator_repository import MySQLCollaboratorRepository
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRequestRepository
from .performance.mysql_performance_repository import MySQLPerformanceNoteRepository
from .personnel.manager import PersonnelManager
from .personnel.persistence import PersonnelPersistence


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    collaborators_repo: MySQLCollaboratorRepository
    leaves_repo: MySQLLeaveRequestRepository
    notes_repo: MySQLPerformanceNoteRepository
    assignments_repo: MySQLAssignmentRepository

    persistence: PersonnelPersistence
    personnel_manager: PersonnelManager


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    collaborators_repo = MySQLCollaboratorRepository(conn)
    leaves_repo = MySQLLeaveRequestRepository(conn)
    notes_repo = MySQLPerformanceNoteRepository(conn)
    assignments_repo = MySQLAssignmentRepository(conn)

    persistence = PersonnelPersistence(collaborators_repo, leaves_repo, notes_repo)
    personnel_manager = PersonnelManager(
        collaborators_repo,
        leaves_repo,
        notes_repo,
        ScheduledCommitments(assignments_repo, leaves_repo),
    )
    personnel_manager.add_event_receiver(persistence)

    return Container(
        conn=conn,
        collaborators_repo=collaborators_repo,
        leaves_repo=leaves_repo,
        notes_repo=notes_repo,
        assignments_repo=assignments_repo,
        persistence=persistence,
        personnel_manager=personnel_manager,
    )
