from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_guard
from .model import User
from .repository import UserRepository

_COLUMNS = "id, username, password, name, role, department, position, email, phone, is_active"

# User field name -> column
_WRITABLE = {
    "username": "username",
    "password_hash": "password",
    "name": "name",
    "role": "role",
    "department": "department",
    "position": "position",
    "email": "email",
    "phone": "phone",
}


def _to_user(r: dict) -> User:
    return User(
        user_id=str(r["id"]),
        username=r["username"],
        password_hash=r["password"],
        name=r["name"],
        role=Role(r["role"]),
        department=r.get("department") or "",
        position=r.get("position") or "",
        email=r.get("email") or "",
        phone=r.get("phone"),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def list_active(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE is_active=TRUE ORDER BY name")
            return [_to_user(r) for r in fetchall(cur)]

    def create(self, user: User) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            with unique_guard("Username sudah digunakan"):
                cur.execute(
                    """
                    INSERT INTO users (id, username, password, name, role, department, position, email, phone, is_active)
                    VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user.user_id,
                        user.username,
                        user.password_hash,
                        user.name,
                        user.role.value,
                        user.department,
                        user.position,
                        user.email,
                        user.phone,
                        user.is_active,
                    ),
                )

    def update(self, user_id: str, changes: Mapping[str, object]) -> bool:
        sets: list[str] = []
        params: list[object] = []
        for field, value in changes.items():
            column = _WRITABLE.get(field)
            if column is None:
                raise ValueError(f"Unsupported user field: {field}")
            sets.append(f"{column}=%s")
            params.append(value.value if isinstance(value, Role) else value)
        if not sets:
            return False

        with db_cursor(self._conn_factory) as (_, cur):
            with unique_guard("Username sudah digunakan"):
                cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE id=%s", (*params, user_id))
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when values are unchanged
            cur.execute("SELECT 1 AS found FROM users WHERE id=%s", (user_id,))
            return fetchone(cur) is not None

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE id=%s", (is_active, user_id))
            return cur.rowcount > 0
