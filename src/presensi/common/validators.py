from __future__ import annotations

from ..core.enums import Role
from ..core.exceptions import Forbidden, ValidationError
from ..users.model import Actor


def require_admin(actor: Actor) -> None:
    if actor.role != Role.ADMIN:
        raise Forbidden()


def require_month(month: int) -> int:
    month = int(month)
    if month < 1 or month > 12:
        raise ValidationError("Bulan tidak valid")
    return month
