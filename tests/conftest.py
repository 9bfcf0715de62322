from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hr_backend.hr_backend.checkins.model import CheckinListRow, CheckinRecord
from src.hr_backend.hr_backend.core.enums import CheckinStatus, EmployeeStatus, EmploymentType
from src.hr_backend.hr_backend.employees.model import Employee, EmployeeCredentials


class InMemoryCheckins:
    """Check-in store honouring the (user_id, checkin_date) key and status-guarded updates."""

    def __init__(self):
        self.records: dict[int, CheckinRecord] = {}
        self.calls: list[str] = []
        self._next_id = 0

    def insert_open_day(self, *, user_id: int, checkin_date: date, checkin_time: time) -> Optional[int]:
        self.calls.append("insert_open_day")
        if self._find_day(user_id, checkin_date):
            return None
        self._next_id += 1
        self.records[self._next_id] = CheckinRecord(
            checkin_id=self._next_id,
            user_id=user_id,
            checkin_date=checkin_date,
            checkin_time=checkin_time,
            checkout_time=None,
            status=CheckinStatus.CHECKIN,
        )
        return self._next_id

    def get_by_id(self, checkin_id: int) -> Optional[CheckinRecord]:
        self.calls.append("get_by_id")
        return self.records.get(int(checkin_id))

    def _find_day(self, user_id: int, checkin_date: date) -> Optional[CheckinRecord]:
        for rec in self.records.values():
            if rec.user_id == user_id and rec.checkin_date == checkin_date:
                return rec
        return None

    def apply_transition(self, plan) -> bool:
        self.calls.append("apply_transition")
        rec = self.records.get(plan.checkin_id)
        if rec is None or rec.status not in plan.expected_from:
            return False
        if plan.is_finish:
            rec = replace(
                rec,
                status=plan.target,
                on_break=False,
                checkout_time=plan.checkout_time,
                daily_minutes=plan.daily_minutes,
            )
        else:
            rec = replace(rec, status=plan.target, on_break=plan.on_break)
        self.records[plan.checkin_id] = rec
        return True

    def get_recent_for_user(self, user_id: int, limit: int):
        items = [r for r in self.records.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.checkin_date, reverse=True)
        return items[:limit]

    def count(self, *, user_id: Optional[int] = None) -> int:
        return len([r for r in self.records.values() if user_id is None or r.user_id == user_id])

    def list_page(self, *, limit: int, offset: int, user_id: Optional[int] = None):
        items = [r for r in self.records.values() if user_id is None or r.user_id == user_id]
        items.sort(key=lambda r: (r.checkin_date, r.checkin_time), reverse=True)
        return [CheckinListRow(record=r, employee=f"Employee {r.user_id}") for r in items[offset : offset + limit]]


class InMemoryEmployees:
    def __init__(self):
        self.employees: dict[int, Employee] = {}
        self.passwords: dict[int, str] = {}
        self.updates: list[tuple[int, dict]] = []
        self.inserted: list[tuple[object, str, str]] = []

    def add(self, employee_id: int, email: str, *, password: str = "password", status=EmployeeStatus.ACTIVE, **extra):
        self.employees[employee_id] = Employee(
            id=employee_id,
            employee_id=f"EMP{employee_id:03d}",
            email=email,
            first_name=extra.pop("first_name", "Test"),
            last_name=extra.pop("last_name", f"User{employee_id}"),
            name=f"Test User{employee_id}",
            employment_type=EmploymentType.PERMANENT,
            employee_status=status,
            **extra,
        )
        self.passwords[employee_id] = generate_password_hash(password)
        return self.employees[employee_id]

    def _credentials(self, e: Employee) -> EmployeeCredentials:
        return EmployeeCredentials(
            id=e.id, email=e.email, password_hash=self.passwords[e.id], employee_status=e.employee_status
        )

    def get_by_id(self, employee_id: int):
        return self.employees.get(int(employee_id))

    def get_credentials(self, email: str):
        for e in self.employees.values():
            if e.email == email:
                return self._credentials(e)
        return None

    def get_active_identity(self, employee_id: int):
        e = self.employees.get(int(employee_id))
        if e is None or e.employee_status != EmployeeStatus.ACTIVE:
            return None
        return self._credentials(e)

    def count(self, filters) -> int:
        return len(self.list_page(filters, limit=10**6, offset=0))

    def list_page(self, filters, *, limit: int, offset: int):
        items = sorted(self.employees.values(), key=lambda e: e.id)
        if filters.department:
            items = [e for e in items if e.department == filters.department]
        if filters.search:
            items = [e for e in items if filters.search.lower() in e.name.lower()]
        return items[offset : offset + limit]

    def last_employee_code(self):
        codes = sorted(e.employee_id for e in self.employees.values() if e.employee_id)
        return codes[-1] if codes else None

    def insert(self, new, *, employee_code: str, password_hash: str) -> int:
        new_id = max(self.employees, default=0) + 1
        self.inserted.append((new, employee_code, password_hash))
        self.employees[new_id] = Employee(
            id=new_id,
            employee_id=employee_code,
            email=new.email,
            first_name=new.first_name,
            last_name=new.last_name,
            name=f"{new.first_name} {new.last_name}",
            employment_type=new.employment_type,
        )
        self.passwords[new_id] = password_hash
        return new_id

    def update(self, employee_id: int, changes) -> bool:
        if int(employee_id) not in self.employees:
            return False
        self.updates.append((int(employee_id), changes.changes()))
        return True

    def distinct_departments(self):
        return sorted({e.department for e in self.employees.values() if e.department})

    def distinct_teams(self):
        return sorted({e.team for e in self.employees.values() if e.team})

    def distinct_statuses(self):
        return sorted({e.employee_status.value for e in self.employees.values()})


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def checkins_repo() -> InMemoryCheckins:
    return InMemoryCheckins()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()
