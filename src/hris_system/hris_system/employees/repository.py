from __future__ import annotations

from typing import Protocol, Sequence

from .model import CompanyRef, DepartmentRef, NewEmployee


class EmployeeRepository(Protocol):
    def list_companies(self) -> Sequence[CompanyRef]: ...

    def list_departments(self) -> Sequence[DepartmentRef]: ...

    def list_existing_emails(self) -> set[str]: ...

    def create_employee(self, employee: NewEmployee) -> int: ...
