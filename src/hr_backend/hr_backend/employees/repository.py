from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeCredentials, EmployeeFilter, EmployeeUpdate, NewEmployee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_credentials(self, email: str) -> Optional[EmployeeCredentials]:
        raise NotImplementedError

    def get_active_identity(self, employee_id: int) -> Optional[EmployeeCredentials]:
        raise NotImplementedError

    def count(self, filters: EmployeeFilter) -> int:
        raise NotImplementedError

    def list_page(self, filters: EmployeeFilter, *, limit: int, offset: int) -> Sequence[Employee]:
        raise NotImplementedError

    def last_employee_code(self) -> Optional[str]:
        raise NotImplementedError

    def insert(self, new: NewEmployee, *, employee_code: str, password_hash: str) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, changes: EmployeeUpdate) -> bool:
        raise NotImplementedError

    def distinct_departments(self) -> Sequence[str]:
        raise NotImplementedError

    def distinct_teams(self) -> Sequence[str]:
        raise NotImplementedError

    def distinct_statuses(self) -> Sequence[str]:
        raise NotImplementedError
