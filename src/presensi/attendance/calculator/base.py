from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import time


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for elapsed working time)."""

    @abstractmethod
    def worked_minutes(self, start: time, end: time) -> int:
        """Minutes between two times of day. May be negative."""
        raise NotImplementedError
