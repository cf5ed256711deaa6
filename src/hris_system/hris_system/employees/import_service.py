from __future__ import annotations

import logging
import secrets
import string
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Mapping, Optional

from werkzeug.security import generate_password_hash

from ..common.validators import require_email, require_non_empty
from ..core.exceptions import DomainError, ValidationError
from ..notifications.service import NotificationService
from .model import ImportResult, ImportRowError, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%"
TEMP_PASSWORD_LENGTH = 12
MAX_IMPORT_ROWS = 1000


def generate_temp_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))


def _code(value: Any) -> str:
    return str(value or "").strip().upper()


class EmployeeImportService:
    """Bulk-create employee accounts from uploaded rows.

    Reference data is loaded once up front. Rows are validated one by one: a bad row
    becomes an error entry with its 1-based row number and never stops the import.
    Emails already stored, or repeated earlier in the same file, are skipped.
    """

    def __init__(self, employees: EmployeeRepository, notifications: Optional[NotificationService] = None):
        self._employees = employees
        self._notifications = notifications

    def _load_lookups(self):
        with ThreadPoolExecutor(max_workers=3) as pool:
            companies = pool.submit(self._employees.list_companies)
            departments = pool.submit(self._employees.list_departments)
            emails = pool.submit(self._employees.list_existing_emails)
            return companies.result(), departments.result(), emails.result()

    def import_rows(self, rows: Iterable[Mapping[str, Any]], *, send_invites: bool = False) -> ImportResult:
        rows = list(rows)
        if not rows:
            raise ValidationError("No rows to import")
        if len(rows) > MAX_IMPORT_ROWS:
            raise ValidationError(f"At most {MAX_IMPORT_ROWS} rows can be imported at once")

        companies, departments, existing = self._load_lookups()
        company_ids = {c.code.upper(): c.company_id for c in companies}
        department_ids = {(d.company_id, d.code.upper()): d.department_id for d in departments}
        seen = {e.lower() for e in existing}

        invite = bool(send_invites and self._notifications and self._notifications.email_enabled)
        result = ImportResult()
        for idx, row in enumerate(rows, start=1):
            email = None
            try:
                if not isinstance(row, Mapping):
                    raise ValidationError("Row must be an object")
                email = require_email(row.get("email"))
                full_name = require_non_empty(row.get("full_name"), "full_name")

                company_code = _code(row.get("company_code"))
                if not company_code:
                    raise ValidationError("company_code is required")
                company_id = company_ids.get(company_code)
                if company_id is None:
                    raise ValidationError(f"Unknown company code {company_code}")

                department_id = None
                department_code = _code(row.get("department_code"))
                if department_code:
                    department_id = department_ids.get((company_id, department_code))
                    if department_id is None:
                        raise ValidationError(f"Unknown department code {department_code} for {company_code}")
            except ValidationError as e:
                result.errors.append(ImportRowError(row=idx, email=email, message=str(e)))
                continue

            if email in seen:
                result.skipped += 1
                continue

            temp_password = generate_temp_password()
            self._employees.create_employee(
                NewEmployee(
                    full_name=full_name,
                    email=email,
                    password_hash=generate_password_hash(temp_password),
                    company_id=company_id,
                    department_id=department_id,
                )
            )
            seen.add(email)
            result.created += 1

            if invite:
                try:
                    self._notifications.send_invitation(email=email, full_name=full_name, temp_password=temp_password)
                    result.invited += 1
                except DomainError as e:
                    logger.warning("invitation to %s failed: %s", email, e)
                    result.errors.append(ImportRowError(row=idx, email=email, message=f"Invitation not sent: {e}"))

        logger.info(
            "employee import: %d created, %d skipped, %d errors", result.created, result.skipped, len(result.errors)
        )
        return result
