from __future__ import annotations

from dataclasses import dataclass

from .auth.service import AuthService
from .checkins.mysql_checkin_repository import MySQLCheckinRepository
from .checkins.service import CheckinService
from .core.constants import DEFAULT_TOKEN_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .documents.mysql_document_repository import MySQLDocumentRepository
from .documents.service import DocumentService
from .documents.storage import DocumentStorage
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.service import FeedbackService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    checkins_repo: MySQLCheckinRepository
    documents_repo: MySQLDocumentRepository
    feedbacks_repo: MySQLFeedbackRepository

    auth_service: AuthService
    employee_service: EmployeeService
    checkin_service: CheckinService
    document_service: DocumentService
    feedback_service: FeedbackService


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    jwt_expire_minutes: int = DEFAULT_TOKEN_MINUTES,
    upload_dir: str = "uploads/documents",
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    checkins_repo = MySQLCheckinRepository(conn)
    documents_repo = MySQLDocumentRepository(conn)
    feedbacks_repo = MySQLFeedbackRepository(conn)

    auth_service = AuthService(
        employees_repo,
        secret=jwt_secret,
        algorithm=jwt_algorithm,
        expires_minutes=jwt_expire_minutes,
    )
    employee_service = EmployeeService(employees_repo)
    checkin_service = CheckinService(checkins_repo)
    document_service = DocumentService(documents_repo, DocumentStorage(upload_dir))
    feedback_service = FeedbackService(feedbacks_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        checkins_repo=checkins_repo,
        documents_repo=documents_repo,
        feedbacks_repo=feedbacks_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        checkin_service=checkin_service,
        document_service=document_service,
        feedback_service=feedback_service,
    )
