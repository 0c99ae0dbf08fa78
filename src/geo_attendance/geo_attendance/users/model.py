from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ELEVATED_ROLES, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: a directory entry as seen by attendance.

    Note: Profiles and credentials live in the user-directory collaborator;
    this is the read-only projection we need for rosters and reports.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    department: Optional[str] = None
    branch_id: Optional[int] = None
    is_active: bool = True


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as issued by the auth collaborator."""

    user_id: int
    role: Role
    department: Optional[str] = None
    branch_id: Optional[int] = None

    @property
    def is_elevated(self) -> bool:
        return self.role in ELEVATED_ROLES
