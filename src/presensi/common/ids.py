from __future__ import annotations

import uuid
from typing import Callable

IdFactory = Callable[[str], str]


def new_id(prefix: str) -> str:
    """Generate a record id such as ``att-3f2c9a1b7d4e4f60``."""
    return f"{prefix}-{uuid.uuid4().hex[:16]}"
