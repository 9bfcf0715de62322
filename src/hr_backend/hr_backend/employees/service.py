from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping, Optional

from werkzeug.security import generate_password_hash

from ..common.pagination import Page, PageRequest
from ..common.validators import (
    optional_text,
    require_choice,
    require_date,
    require_email,
    require_float,
    require_int,
    require_non_empty,
)
from ..core.constants import DEFAULT_EMPLOYEE_PASSWORD, EMPLOYEE_ID_PREFIX, MAX_WEEKLY_HOURS
from ..core.enums import EmployeeStatus, EmploymentType, Gender
from ..core.exceptions import ConflictError, DuplicateKeyError, NotFoundError, ValidationError
from .model import MUTABLE_FIELDS, Employee, EmployeeFilter, EmployeeUpdate, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _text(max_len: int) -> Callable[[Any, str], Any]:
    return lambda value, name: optional_text(value, name, max_len=max_len)


def _required_text(max_len: int) -> Callable[[Any, str], Any]:
    return lambda value, name: require_non_empty(value, name, max_len=max_len)


def _optional(parser: Callable[[Any, str], Any]) -> Callable[[Any, str], Any]:
    return lambda value, name: None if value in (None, "") else parser(value, name)


_FIELD_PARSERS: dict[str, Callable[[Any, str], Any]] = {
    "first_name": _required_text(100),
    "last_name": _required_text(100),
    "email": lambda v, n: require_email(v, n),
    "dob": _optional(require_date),
    "gender": _optional(lambda v, n: require_choice(v, Gender, n)),
    "nationality": _text(100),
    "phone": _text(20),
    "address": _text(2000),
    "house_number": _text(20),
    "postcode": _text(20),
    "city": _text(100),
    "employee_status": lambda v, n: require_choice(v, EmployeeStatus, n),
    "employment_type": lambda v, n: require_choice(v, EmploymentType, n),
    "position": _text(100),
    "department": _text(100),
    "team": _text(100),
    "role": _text(100),
    "reporting_manager": _text(100),
    "hired_at": _optional(require_date),
    "contract_start_at": _optional(require_date),
    "contract_end_at": _optional(require_date),
    "notice_period": _text(50),
    "probation_time": _text(50),
    "weekly_hours": _optional(lambda v, n: require_float(v, n, min_value=0, max_value=MAX_WEEKLY_HOURS)),
    "onboarding_type": _text(100),
    "working_time_model": _text(100),
    "salary_type": _text(50),
    "base_salary": _optional(lambda v, n: require_float(v, n, min_value=0, max_value=99_999_999)),
    "paid_vacation": _optional(lambda v, n: require_int(v, n, min_value=0, max_value=365)),
    "tax_id": _text(50),
    "social_security_number": _text(50),
    "iban": _text(50),
    "bic": _text(20),
    "emergency_person_name": _text(100),
    "emergency_person_contact": _text(50),
    "emergency_person_relation": _text(50),
    "linkedin_url": _text(500),
}


def next_employee_code(last_code: Optional[str]) -> str:
    """``EMP001`` for an empty table, otherwise the last number plus one."""
    number = 0
    if last_code:
        match = re.search(r"(\d+)$", last_code)
        if match:
            number = int(match.group(1))
    return f"{EMPLOYEE_ID_PREFIX}{number + 1:03d}"


def parse_employee_update(payload: Mapping[str, Any]) -> EmployeeUpdate:
    """Build a typed update from request data; anything outside the allow-list is rejected."""
    data = {k: v for k, v in payload.items() if k != "update_type"}

    unknown = sorted(k for k in data if k not in MUTABLE_FIELDS)
    if unknown:
        raise ValidationError(
            f"Fields cannot be updated: {', '.join(unknown)}",
            [{"field": k, "message": "not updatable"} for k in unknown],
        )
    if not data:
        raise ValidationError("No fields to update")

    parsed = {name: _FIELD_PARSERS[name](value, name) for name, value in data.items()}
    return EmployeeUpdate(**parsed)


class EmployeeService:
    """Use cases: list, view, create and update employees."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, page: PageRequest, filters: EmployeeFilter) -> Page[Employee]:
        if filters.search and len(filters.search) > 255:
            raise ValidationError("search must be at most 255 characters")
        total = self._employees.count(filters)
        items = self._employees.list_page(filters, limit=page.per_page, offset=page.offset)
        return Page(items=list(items), total=total, request=page)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def parse_new_employee(self, payload: Mapping[str, Any]) -> NewEmployee:
        errors: list[dict] = []

        def collect(parser: Callable[[], Any]) -> Any:
            try:
                return parser()
            except ValidationError as exc:
                errors.extend(exc.errors or [{"field": None, "message": str(exc)}])
                return None

        values = dict(
            first_name=collect(lambda: require_non_empty(payload.get("first_name"), "first_name", max_len=100)),
            last_name=collect(lambda: require_non_empty(payload.get("last_name"), "last_name", max_len=100)),
            email=collect(lambda: require_email(payload.get("email"))),
            employment_type=collect(lambda: require_choice(payload.get("employment_type"), EmploymentType, "employment_type")),
            dob=collect(lambda: require_date(payload.get("dob"), "dob")),
            position=collect(lambda: require_non_empty(payload.get("position"), "position", max_len=100)),
            department=collect(lambda: require_non_empty(payload.get("department"), "department", max_len=100)),
            weekly_hours=collect(
                lambda: require_float(payload.get("weekly_hours"), "weekly_hours", min_value=0, max_value=MAX_WEEKLY_HOURS)
            ),
            team=collect(lambda: optional_text(payload.get("team"), "team", max_len=100)),
            reporting_manager=collect(lambda: optional_text(payload.get("reporting_manager"), "reporting_manager", max_len=100)),
            city=collect(lambda: optional_text(payload.get("city"), "city", max_len=100)),
            contract_start_at=collect(lambda: _FIELD_PARSERS["contract_start_at"](payload.get("contract_start_at"), "contract_start_at")),
            working_time_model=collect(lambda: optional_text(payload.get("working_time_model"), "working_time_model", max_len=100)),
            salary_type=collect(lambda: optional_text(payload.get("salary_type"), "salary_type", max_len=50)),
            base_salary=collect(lambda: _FIELD_PARSERS["base_salary"](payload.get("base_salary"), "base_salary")),
            paid_vacation=collect(lambda: _FIELD_PARSERS["paid_vacation"](payload.get("paid_vacation"), "paid_vacation")),
            onboarding_type=collect(lambda: optional_text(payload.get("onboarding_type"), "onboarding_type", max_len=100)),
        )
        if errors:
            raise ValidationError("Validation failed", errors)
        return NewEmployee(**values)

    def create_employee(self, new: NewEmployee) -> tuple[int, str]:
        if self._employees.get_credentials(new.email):
            raise ConflictError("Email already exists")

        code = next_employee_code(self._employees.last_employee_code())
        password_hash = generate_password_hash(DEFAULT_EMPLOYEE_PASSWORD)
        try:
            new_id = self._employees.insert(new, employee_code=code, password_hash=password_hash)
        except DuplicateKeyError as exc:
            if exc.key and "email" in exc.key:
                raise ConflictError("Email already exists") from exc
            raise ConflictError("Employee number already taken, please retry") from exc

        logger.info("employee created id=%s code=%s", new_id, code)
        return new_id, code

    def update_employee(self, employee_id: int, payload: Mapping[str, Any]) -> None:
        changes = parse_employee_update(payload)
        try:
            updated = self._employees.update(employee_id, changes)
        except DuplicateKeyError as exc:
            raise ConflictError("Email already exists") from exc
        if not updated:
            raise NotFoundError("Employee not found")

    def filters(self) -> list[dict]:
        def slug(value: str) -> str:
            return re.sub(r"\s+", "_", value.lower())

        return [
            {
                "key": "department",
                "label": "Department",
                "values": {slug(d): d for d in self._employees.distinct_departments()},
            },
            {
                "key": "team",
                "label": "Team",
                "values": {slug(t): t for t in self._employees.distinct_teams()},
            },
            {
                "key": "employee_status",
                "label": "Status",
                "values": {s: s for s in self._employees.distinct_statuses()},
            },
        ]
