from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from ..core.enums import EmployeeStatus, EmploymentType, Gender


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee (row of ``users``).

    ``name`` is generated by the store from first and last name.
    """

    id: int
    employee_id: Optional[str]
    email: str
    first_name: str
    last_name: str
    name: str
    employment_type: EmploymentType
    employee_status: EmployeeStatus = EmployeeStatus.ACTIVE
    dob: Optional[date] = None
    gender: Optional[Gender] = None
    nationality: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    house_number: Optional[str] = None
    postcode: Optional[str] = None
    city: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    team: Optional[str] = None
    role: Optional[str] = None
    reporting_manager: Optional[str] = None
    hired_at: Optional[date] = None
    contract_start_at: Optional[date] = None
    contract_end_at: Optional[date] = None
    notice_period: Optional[str] = None
    probation_time: Optional[str] = None
    weekly_hours: Optional[Decimal] = None
    onboarding_type: Optional[str] = None
    working_time_model: Optional[str] = None
    salary_type: Optional[str] = None
    base_salary: Optional[Decimal] = None
    paid_vacation: Optional[int] = None
    tax_id: Optional[str] = None
    social_security_number: Optional[str] = None
    iban: Optional[str] = None
    bic: Optional[str] = None
    emergency_person_name: Optional[str] = None
    emergency_person_contact: Optional[str] = None
    emergency_person_relation: Optional[str] = None
    linkedin_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (EmployeeStatus, EmploymentType, Gender)):
                value = value.value
            elif isinstance(value, (date, datetime)):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = float(value)
            out[f.name] = value
        return out

    def summary(self) -> dict:
        """Columns shown in the paginated employee list."""
        full = self.to_dict()
        keys = (
            "id", "employee_id", "name", "email", "employee_status", "employment_type",
            "position", "department", "team", "role", "city", "hired_at", "weekly_hours",
        )
        return {k: full[k] for k in keys}


@dataclass(frozen=True)
class EmployeeCredentials:
    id: int
    email: str
    password_hash: str
    employee_status: EmployeeStatus


@dataclass(frozen=True)
class EmployeeFilter:
    search: Optional[str] = None
    department: Optional[str] = None
    team: Optional[str] = None
    employee_status: Optional[str] = None


@dataclass(frozen=True)
class NewEmployee:
    first_name: str
    last_name: str
    email: str
    employment_type: EmploymentType
    dob: date
    position: str
    department: str
    weekly_hours: float
    team: Optional[str] = None
    reporting_manager: Optional[str] = None
    city: Optional[str] = None
    contract_start_at: Optional[date] = None
    working_time_model: Optional[str] = None
    salary_type: Optional[str] = None
    base_salary: Optional[float] = None
    paid_vacation: Optional[int] = None
    onboarding_type: Optional[str] = None


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class EmployeeUpdate:
    """Typed partial update; only fields declared here can ever reach the UPDATE.

    A field left as ``UNSET`` is not touched; ``None`` clears a nullable column.
    """

    first_name: Any = field(default=UNSET)
    last_name: Any = field(default=UNSET)
    email: Any = field(default=UNSET)
    dob: Any = field(default=UNSET)
    gender: Any = field(default=UNSET)
    nationality: Any = field(default=UNSET)
    phone: Any = field(default=UNSET)
    address: Any = field(default=UNSET)
    house_number: Any = field(default=UNSET)
    postcode: Any = field(default=UNSET)
    city: Any = field(default=UNSET)
    employee_status: Any = field(default=UNSET)
    employment_type: Any = field(default=UNSET)
    position: Any = field(default=UNSET)
    department: Any = field(default=UNSET)
    team: Any = field(default=UNSET)
    role: Any = field(default=UNSET)
    reporting_manager: Any = field(default=UNSET)
    hired_at: Any = field(default=UNSET)
    contract_start_at: Any = field(default=UNSET)
    contract_end_at: Any = field(default=UNSET)
    notice_period: Any = field(default=UNSET)
    probation_time: Any = field(default=UNSET)
    weekly_hours: Any = field(default=UNSET)
    onboarding_type: Any = field(default=UNSET)
    working_time_model: Any = field(default=UNSET)
    salary_type: Any = field(default=UNSET)
    base_salary: Any = field(default=UNSET)
    paid_vacation: Any = field(default=UNSET)
    tax_id: Any = field(default=UNSET)
    social_security_number: Any = field(default=UNSET)
    iban: Any = field(default=UNSET)
    bic: Any = field(default=UNSET)
    emergency_person_name: Any = field(default=UNSET)
    emergency_person_contact: Any = field(default=UNSET)
    emergency_person_relation: Any = field(default=UNSET)
    linkedin_url: Any = field(default=UNSET)

    def changes(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if isinstance(value, Enum):
                value = value.value
            out[f.name] = value
        return out


MUTABLE_FIELDS: frozenset[str] = frozenset(f.name for f in fields(EmployeeUpdate))
