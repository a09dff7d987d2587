from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """User lookups for login plus the writes behind account administration."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self) -> Sequence[User]:
        raise NotImplementedError

    def create(self, user: User) -> None:
        """Insert an account. Raises DuplicateRecord if the username is taken."""

        raise NotImplementedError

    def update(self, user_id: str, changes: Mapping[str, object]) -> bool:
        """Apply ``changes`` (User field name -> value). False when no row matched."""

        raise NotImplementedError

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        raise NotImplementedError
