from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus, EmploymentType, Gender
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeCredentials, EmployeeFilter, EmployeeUpdate, MUTABLE_FIELDS, NewEmployee
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = (
    "id, employee_id, email, first_name, last_name, name, dob, gender, nationality, "
    "phone, address, house_number, postcode, city, employee_status, employment_type, "
    "position, department, team, role, reporting_manager, hired_at, contract_start_at, "
    "contract_end_at, notice_period, probation_time, weekly_hours, onboarding_type, "
    "working_time_model, salary_type, base_salary, paid_vacation, tax_id, "
    "social_security_number, iban, bic, emergency_person_name, emergency_person_contact, "
    "emergency_person_relation, linkedin_url, created_at, updated_at"
)


def _to_employee(r: dict) -> Employee:
    data = dict(r)
    data["id"] = int(data["id"])
    data["employee_status"] = EmployeeStatus(data["employee_status"])
    data["employment_type"] = EmploymentType(data["employment_type"])
    data["gender"] = Gender(data["gender"]) if data.get("gender") else None
    if data.get("weekly_hours") is not None:
        data["weekly_hours"] = Decimal(str(data["weekly_hours"]))
    if data.get("base_salary") is not None:
        data["base_salary"] = Decimal(str(data["base_salary"]))
    return Employee(**data)


def _to_credentials(r: dict) -> EmployeeCredentials:
    return EmployeeCredentials(
        id=int(r["id"]),
        email=r["email"],
        password_hash=r["password"],
        employee_status=EmployeeStatus(r["employee_status"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM users WHERE id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_credentials(self, email: str) -> Optional[EmployeeCredentials]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, email, password, employee_status FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_credentials(row) if row else None

    def get_active_identity(self, employee_id: int) -> Optional[EmployeeCredentials]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, password, employee_status FROM users WHERE id=%s AND employee_status=%s",
                (int(employee_id), EmployeeStatus.ACTIVE.value),
            )
            row = fetchone(cur)
            return _to_credentials(row) if row else None

    @staticmethod
    def _where(filters: EmployeeFilter) -> tuple[str, list[object]]:
        clauses = ["1=1"]
        params: list[object] = []

        if filters.search:
            term = f"%{filters.search}%"
            clauses.append("(name LIKE %s OR email LIKE %s OR position LIKE %s)")
            params.extend([term, term, term])
        if filters.department:
            clauses.append("department=%s")
            params.append(filters.department)
        if filters.team:
            clauses.append("team=%s")
            params.append(filters.team)
        if filters.employee_status:
            clauses.append("employee_status=%s")
            params.append(filters.employee_status)

        return "WHERE " + " AND ".join(clauses), params

    def count(self, filters: EmployeeFilter) -> int:
        where, params = self._where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM users {where}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_page(self, filters: EmployeeFilter, *, limit: int, offset: int) -> Sequence[Employee]:
        where, params = self._where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM users
                {where}
                ORDER BY name ASC
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), int(offset)),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def last_employee_code(self) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM users ORDER BY id DESC LIMIT 1")
            row = fetchone(cur)
            return row.get("employee_id") if row else None

    def insert(self, new: NewEmployee, *, employee_code: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users (
                    employee_id, email, password, first_name, last_name, dob,
                    employment_type, position, department, team, reporting_manager,
                    city, weekly_hours, contract_start_at, working_time_model,
                    salary_type, base_salary, paid_vacation, onboarding_type
                ) VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_code,
                    new.email,
                    password_hash,
                    new.first_name,
                    new.last_name,
                    new.dob,
                    new.employment_type.value,
                    new.position,
                    new.department,
                    new.team,
                    new.reporting_manager,
                    new.city,
                    new.weekly_hours,
                    new.contract_start_at,
                    new.working_time_model,
                    new.salary_type,
                    new.base_salary,
                    new.paid_vacation,
                    new.onboarding_type,
                ),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, changes: EmployeeUpdate) -> bool:
        values = changes.changes()
        # Column names come from the EmployeeUpdate declaration, never from the request.
        columns = [name for name in values if name in MUTABLE_FIELDS]
        if not columns:
            return False

        assignments = ", ".join(f"{name}=%s" for name in columns)
        params = [values[name] for name in columns]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE users SET {assignments}, updated_at=CURRENT_TIMESTAMP WHERE id=%s",
                (*params, int(employee_id)),
            )
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when values are unchanged.
            cur.execute("SELECT id FROM users WHERE id=%s", (int(employee_id),))
            return fetchone(cur) is not None

    def _distinct(self, column: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT DISTINCT {column} AS value FROM users WHERE {column} IS NOT NULL ORDER BY {column}")
            return [r["value"] for r in fetchall(cur)]

    def distinct_departments(self) -> Sequence[str]:
        return self._distinct("department")

    def distinct_teams(self) -> Sequence[str]:
        return self._distinct("team")

    def distinct_statuses(self) -> Sequence[str]:
        return self._distinct("employee_status")
