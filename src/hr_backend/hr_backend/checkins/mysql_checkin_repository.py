from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import CheckinStatus
from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import CheckinListRow, CheckinRecord
from .repository import CheckinRepository
from .transitions import TransitionPlan

_COLUMNS = """
    ec.id, ec.user_id, ec.checkin_date, ec.checkin_time, ec.checkout_time,
    ec.status, ec.on_break,
    ec.total_working_minutes, ec.total_break_minutes, ec.total_daily_minutes,
    ec.created_at, ec.updated_at
"""


def _to_record(r: dict) -> CheckinRecord:
    return CheckinRecord(
        checkin_id=int(r["id"]),
        user_id=int(r["user_id"]),
        checkin_date=r["checkin_date"],
        checkin_time=normalize_mysql_time(r["checkin_time"]),
        checkout_time=normalize_mysql_time(r.get("checkout_time")),
        status=CheckinStatus(r["status"]),
        on_break=bool(r.get("on_break")),
        working_minutes=int(r.get("total_working_minutes") or 0),
        break_minutes=int(r.get("total_break_minutes") or 0),
        daily_minutes=int(r.get("total_daily_minutes") or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLCheckinRepository(CheckinRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_open_day(self, *, user_id: int, checkin_date: date, checkin_time: time) -> Optional[int]:
        # uq_employee_checkins_user_date is the day-uniqueness guarantee.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employee_checkins(user_id, checkin_date, checkin_time, status, on_break)
                    VALUES(%s,%s,%s,%s,0)
                    """,
                    (user_id, checkin_date, checkin_time, CheckinStatus.CHECKIN.value),
                )
                return int(cur.lastrowid)
        except DuplicateKeyError:
            return None

    def get_by_id(self, checkin_id: int) -> Optional[CheckinRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employee_checkins ec WHERE ec.id=%s", (int(checkin_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def apply_transition(self, plan: TransitionPlan) -> bool:
        expected = sorted(s.value for s in plan.expected_from)
        placeholders = ",".join(["%s"] * len(expected))

        with db_cursor(self._conn_factory) as (_, cur):
            if plan.is_finish:
                cur.execute(
                    f"""
                    UPDATE employee_checkins
                    SET status=%s, on_break=0, checkout_time=%s, total_daily_minutes=%s,
                        updated_at=CURRENT_TIMESTAMP
                    WHERE id=%s AND status IN ({placeholders})
                    """,
                    (plan.target.value, plan.checkout_time, int(plan.daily_minutes or 0), plan.checkin_id, *expected),
                )
            else:
                cur.execute(
                    f"""
                    UPDATE employee_checkins
                    SET status=%s, on_break=%s, updated_at=CURRENT_TIMESTAMP
                    WHERE id=%s AND status IN ({placeholders})
                    """,
                    (plan.target.value, 1 if plan.on_break else 0, plan.checkin_id, *expected),
                )
            return cur.rowcount > 0

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[CheckinRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_checkins ec
                WHERE ec.user_id=%s
                ORDER BY ec.checkin_date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count(self, *, user_id: Optional[int] = None) -> int:
        where, params = self._where(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employee_checkins ec {where}", params)
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def list_page(self, *, limit: int, offset: int, user_id: Optional[int] = None) -> Sequence[CheckinListRow]:
        where, params = self._where(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.name AS employee
                FROM employee_checkins ec
                JOIN users u ON ec.user_id = u.id
                {where}
                ORDER BY ec.checkin_date DESC, ec.checkin_time DESC
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), int(offset)),
            )
            return [CheckinListRow(record=_to_record(r), employee=r["employee"]) for r in fetchall(cur)]

    @staticmethod
    def _where(user_id: Optional[int]) -> tuple[str, tuple]:
        if user_id is None:
            return "", ()
        return "WHERE ec.user_id=%s", (int(user_id),)
