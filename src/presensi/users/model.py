from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account.

    Note: plain data object, no DB access code here.
    """

    user_id: str
    username: str
    password_hash: str
    name: str
    role: Role
    department: str = ""
    position: str = ""
    email: str = ""
    phone: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class Actor:
    """Acting user as supplied by the session layer. Trusted as-is."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
