from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CompanyRef:
    company_id: int
    code: str


@dataclass(frozen=True)
class DepartmentRef:
    department_id: int
    company_id: int
    code: str


@dataclass(frozen=True)
class NewEmployee:
    full_name: str
    email: str
    password_hash: str
    company_id: int
    department_id: Optional[int] = None


@dataclass(frozen=True)
class ImportRowError:
    row: int
    message: str
    email: Optional[str] = None

    def to_dict(self) -> dict:
        return {"row": self.row, "email": self.email, "message": self.message}


@dataclass
class ImportResult:
    created: int = 0
    skipped: int = 0
    invited: int = 0
    errors: list[ImportRowError] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "skipped": self.skipped,
            "invited": self.invited,
            "errors": [e.to_dict() for e in self.errors],
        }
