from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import FeedbackStatus, FeedbackType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Feedback, FeedbackScope, NewFeedback
from .repository import FeedbackRepository

_SELECT = """
    SELECT f.id, f.requested_by, f.requested_to, f.requested_for, f.feedback_topic, f.feedback,
           f.type, f.status, f.feedback_check, f.created_at, f.updated_at,
           u_by.name AS requested_by_user,
           u_to.name AS requested_to_user,
           u_for.name AS requested_for_user
    FROM employee_feedbacks f
    LEFT JOIN users u_by ON f.requested_by = u_by.id
    LEFT JOIN users u_to ON f.requested_to = u_to.id
    LEFT JOIN users u_for ON f.requested_for = u_for.id
"""


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _where(scope: FeedbackScope) -> tuple[str, tuple]:
        clauses: list[str] = []
        params: list[object] = []
        if scope.type is not None:
            clauses.append("f.type=%s")
            params.append(scope.type.value)
        if scope.requested_by is not None:
            clauses.append("f.requested_by=%s")
            params.append(int(scope.requested_by))
        if scope.requested_to is not None:
            clauses.append("f.requested_to=%s")
            params.append(int(scope.requested_to))
        if not clauses:
            return "", ()
        return "WHERE " + " AND ".join(clauses), tuple(params)

    @staticmethod
    def _to_feedback(r: Dict[str, Any]) -> Feedback:
        return Feedback(
            feedback_id=int(r["id"]),
            type=FeedbackType(r["type"]),
            status=FeedbackStatus(r["status"]),
            requested_by=_optional_int(r.get("requested_by")),
            requested_to=_optional_int(r.get("requested_to")),
            requested_for=_optional_int(r.get("requested_for")),
            feedback_topic=r.get("feedback_topic"),
            feedback=r.get("feedback"),
            feedback_check=bool(r.get("feedback_check")),
            created_at=r.get("created_at"),
            updated_at=r.get("updated_at"),
            requested_by_user=r.get("requested_by_user"),
            requested_to_user=r.get("requested_to_user"),
            requested_for_user=r.get("requested_for_user"),
        )

    def count(self, scope: FeedbackScope) -> int:
        where, params = self._where(scope)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employee_feedbacks f {where}", params)
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_page(self, scope: FeedbackScope, *, limit: int, offset: int) -> Sequence[Feedback]:
        where, params = self._where(scope)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} {where} ORDER BY f.created_at DESC, f.id DESC LIMIT %s OFFSET %s",
                (*params, int(limit), int(offset)),
            )
            return [self._to_feedback(r) for r in fetchall(cur)]

    def get_by_id(self, feedback_id: int) -> Optional[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE f.id=%s", (int(feedback_id),))
            row = fetchone(cur)
            return self._to_feedback(row) if row else None

    def insert(self, new: NewFeedback) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_feedbacks(
                    requested_by, requested_to, requested_for, feedback_topic, feedback,
                    type, status, feedback_check
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(new.requested_by),
                    new.requested_to,
                    new.requested_for,
                    new.feedback_topic,
                    new.feedback,
                    new.type.value,
                    new.status.value,
                    1 if new.feedback_check else 0,
                ),
            )
            return int(cur.lastrowid)

    def complete(self, feedback_id: int, *, feedback: Optional[str], feedback_check: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employee_feedbacks
                SET feedback=%s, feedback_check=%s, status=%s, updated_at=CURRENT_TIMESTAMP
                WHERE id=%s
                """,
                (feedback, 1 if feedback_check else 0, FeedbackStatus.COMPLETED.value, int(feedback_id)),
            )
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when nothing changed.
            cur.execute("SELECT 1 AS found FROM employee_feedbacks WHERE id=%s", (int(feedback_id),))
            return fetchone(cur) is not None

    def delete_requested_by(self, feedback_id: int, requested_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM employee_feedbacks WHERE id=%s AND requested_by=%s",
                (int(feedback_id), int(requested_by)),
            )
            return cur.rowcount > 0
