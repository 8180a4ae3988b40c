from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone


# PUBLIC_INTERFACE
class Clock(ABC):
    """Source of the current time, injected so deadline checks can be pinned in tests."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
