from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import RosterRepository


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row.get("email") or "",
        role=Role(row["role"]),
        department=row.get("department"),
        branch_id=int(row["branch_id"]) if row.get("branch_id") is not None else None,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, email, role, department, branch_id, is_active
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_by_ids(self, user_ids: Sequence[int]) -> Sequence[Employee]:
        ids = sorted({int(u) for u in user_ids})
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, full_name, email, role, department, branch_id, is_active
                FROM users
                WHERE user_id IN ({placeholders})
                """,
                tuple(ids),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active_roster(self, *, branch_id: Optional[int] = None) -> Sequence[Employee]:
        clauses = ["is_active=1", "role<>%s"]
        params: list[object] = [Role.ADMIN.value]
        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(int(branch_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, full_name, email, role, department, branch_id, is_active
                FROM users
                WHERE {" AND ".join(clauses)}
                ORDER BY full_name ASC
                """,
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]
