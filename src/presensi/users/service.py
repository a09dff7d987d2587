from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import IdFactory, new_id
from ..common.validators import require_admin
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateRecord, Forbidden, RecordNotFound, ValidationError
from .model import Actor, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    username: str
    name: str
    role: Role

    def to_actor(self) -> Actor:
        return Actor(user_id=self.user_id, role=self.role)


def to_profile(user: User) -> dict:
    return {
        "id": user.user_id,
        "username": user.username,
        "name": user.name,
        "role": user.role.value,
        "department": user.department,
        "position": user.position,
        "email": user.email,
        "phone": user.phone,
    }


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError()

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes in seed data are not valid werkzeug hashes
            ok = False

        if not ok:
            logger.debug("Rejected login for %s", username)
            raise AuthenticationError()

        logger.info("User %s logged in", user.user_id)
        return SessionUser(user_id=user.user_id, username=user.username, name=user.name, role=user.role)

    def get_profile(self, user_id: str) -> dict:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise RecordNotFound("Pengguna tidak ditemukan")
        return to_profile(user)


_USERNAME_TAKEN = "Username sudah digunakan"
_USER_NOT_FOUND = "User tidak ditemukan"
_PROFILE_FIELDS = ("username", "name", "department", "position", "email", "phone")


def _parse_role(value) -> Role:
    try:
        return value if isinstance(value, Role) else Role(str(value))
    except ValueError:
        raise ValidationError("Role tidak valid")


class UserService:
    """Use case: manage accounts (admin), plus self-service profile edits."""

    def __init__(self, users: UserRepository, *, id_factory: IdFactory | None = None):
        self._users = users
        self._new_id = id_factory or new_id

    def list(self, *, actor: Actor) -> Sequence[User]:
        require_admin(actor)
        return sorted(self._users.list_active(), key=lambda u: u.name)

    def get(self, *, actor: Actor, user_id: str) -> User:
        if actor.user_id != user_id and not actor.is_admin:
            raise Forbidden()
        return self._get_active(user_id)

    def create(
        self,
        *,
        actor: Actor,
        username: Optional[str],
        password: Optional[str],
        name: Optional[str],
        role,
        department: Optional[str],
        position: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
    ) -> User:
        require_admin(actor)

        username = (username or "").strip()
        name = (name or "").strip()
        department = (department or "").strip()
        position = (position or "").strip()
        email = (email or "").strip()
        if not all([username, password, name, role, department, position, email]):
            raise ValidationError("Semua field wajib diisi")

        if self._users.get_by_username(username):
            raise DuplicateRecord(_USERNAME_TAKEN)

        user = User(
            user_id=self._new_id("emp"),
            username=username,
            password_hash=generate_password_hash(password),
            name=name,
            role=_parse_role(role),
            department=department,
            position=position,
            email=email,
            phone=(phone or "").strip(),
        )
        try:
            self._users.create(user)
        except DuplicateRecord:
            raise DuplicateRecord(_USERNAME_TAKEN)

        logger.info("User %s (%s) created by %s", user.user_id, user.username, actor.user_id)
        return self._get_active(user.user_id)

    def update(self, *, actor: Actor, user_id: str, data: dict) -> User:
        """Partial update. Only admins may change ``role``; others' role is ignored."""
        if actor.user_id != user_id and not actor.is_admin:
            raise Forbidden()

        self._get_active(user_id)

        changes: dict[str, object] = {f: data[f] for f in _PROFILE_FIELDS if data.get(f) is not None}
        if actor.is_admin and data.get("role") is not None:
            changes["role"] = _parse_role(data["role"])
        if data.get("password"):
            changes["password_hash"] = generate_password_hash(str(data["password"]))

        if not changes:
            raise ValidationError("Tidak ada data yang diupdate")

        username = changes.get("username")
        if username is not None:
            other = self._users.get_by_username(str(username))
            if other and other.user_id != user_id:
                raise DuplicateRecord(_USERNAME_TAKEN)

        try:
            ok = self._users.update(user_id, changes)
        except DuplicateRecord:
            raise DuplicateRecord(_USERNAME_TAKEN)
        if not ok:
            raise RecordNotFound(_USER_NOT_FOUND)

        logger.info("User %s updated by %s (%s)", user_id, actor.user_id, ", ".join(sorted(changes)))
        return self._get_active(user_id)

    def deactivate(self, *, actor: Actor, user_id: str) -> None:
        """Soft delete: the account can no longer log in."""
        require_admin(actor)

        if actor.user_id == user_id:
            raise ValidationError("Tidak dapat menghapus akun sendiri")

        if not self._users.set_active(user_id, is_active=False):
            raise RecordNotFound(_USER_NOT_FOUND)

        logger.info("User %s deactivated by %s", user_id, actor.user_id)

    def _get_active(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise RecordNotFound(_USER_NOT_FOUND)
        return user
