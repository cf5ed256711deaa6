from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account able to call the API."""

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    company_id: Optional[int]
    is_active: bool = True
