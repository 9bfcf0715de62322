from __future__ import annotations

from datetime import date, time, timedelta

import mysql.connector

from src.hr_backend.hr_backend.checkins.mysql_checkin_repository import MySQLCheckinRepository
from src.hr_backend.hr_backend.checkins.transitions import OPEN_STATUSES, TransitionPlan
from src.hr_backend.hr_backend.core.enums import CheckinStatus


class FakeCursor:
    def __init__(self, rows=None, rowcount=1, error=None):
        self.rows = list(rows or [])
        self.rowcount = rowcount
        self.lastrowid = 42
        self.error = error
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))
        if self.error is not None:
            raise self.error

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeFactory:
    def __init__(self, cursor):
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn


def test_checkout_update_is_guarded_on_open_status():
    cur = FakeCursor(rowcount=1)
    repo = MySQLCheckinRepository(FakeFactory(cur))
    plan = TransitionPlan(
        checkin_id=5,
        target=CheckinStatus.CHECKOUT,
        expected_from=OPEN_STATUSES,
        on_break=False,
        checkout_time=time(17, 30),
        daily_minutes=510,
    )

    assert repo.apply_transition(plan) is True

    sql, params = cur.executed[0]
    assert "WHERE id=%s AND status IN (%s,%s)" in sql
    assert "checkout_time=%s" in sql
    assert params == ("checkout", time(17, 30), 510, 5, "break", "checkin")


def test_transition_reports_lost_race():
    cur = FakeCursor(rowcount=0)
    repo = MySQLCheckinRepository(FakeFactory(cur))
    plan = TransitionPlan(
        checkin_id=5,
        target=CheckinStatus.BREAK,
        expected_from=frozenset({CheckinStatus.CHECKIN}),
        on_break=True,
    )

    assert repo.apply_transition(plan) is False
    sql, params = cur.executed[0]
    assert "checkout_time" not in sql
    assert params == ("break", 1, 5, "checkin")


def test_duplicate_day_returns_none():
    error = mysql.connector.IntegrityError(
        msg="Duplicate entry '7-2026-02-02' for key 'employee_checkins.uq_employee_checkins_user_date'",
        errno=1062,
    )
    factory = FakeFactory(FakeCursor(error=error))
    repo = MySQLCheckinRepository(factory)

    assert repo.insert_open_day(user_id=7, checkin_date=date(2026, 2, 2), checkin_time=time(9, 0)) is None
    assert factory.conn.rolled_back is True


def test_rows_are_mapped_with_timedelta_times():
    row = {
        "id": 3,
        "user_id": 7,
        "checkin_date": date(2026, 2, 2),
        "checkin_time": timedelta(hours=9),
        "checkout_time": timedelta(hours=17, minutes=30),
        "status": "checkout",
        "on_break": 0,
        "total_working_minutes": 0,
        "total_break_minutes": 0,
        "total_daily_minutes": 510,
        "created_at": None,
        "updated_at": None,
    }
    repo = MySQLCheckinRepository(FakeFactory(FakeCursor(rows=[row])))

    rec = repo.get_by_id(3)

    assert rec.checkin_time == time(9, 0)
    assert rec.checkout_time == time(17, 30)
    assert rec.status == CheckinStatus.CHECKOUT
    assert rec.daily_hours == "08:30"
