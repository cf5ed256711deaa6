from __future__ import annotations

from typing import Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import CompanyRef, DepartmentRef, NewEmployee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_companies(self) -> Sequence[CompanyRef]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT company_id, code FROM companies WHERE is_active=1")
            return [CompanyRef(company_id=int(r["company_id"]), code=r["code"]) for r in fetchall(cur)]

    def list_departments(self) -> Sequence[DepartmentRef]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT department_id, company_id, code FROM departments")
            return [
                DepartmentRef(department_id=int(r["department_id"]), company_id=int(r["company_id"]), code=r["code"])
                for r in fetchall(cur)
            ]

    def list_existing_emails(self) -> set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT email FROM users")
            return {str(r["email"]).lower() for r in fetchall(cur)}

    def create_employee(self, employee: NewEmployee) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users (full_name, email, password_hash, role, company_id, department_id, must_change_password)
                VALUES (%s, %s, %s, %s, %s, %s, 1)
                """,
                (
                    employee.full_name,
                    employee.email,
                    employee.password_hash,
                    Role.EMPLOYEE.value,
                    employee.company_id,
                    employee.department_id,
                ),
            )
            return int(cur.lastrowid)
