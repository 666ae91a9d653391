"""System infrastructure port definitions."""

from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Abstract interface for clock operations."""

    @abstractmethod
    def now(self) -> datetime:
        """Get current local time."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Get current UTC time (timezone-aware)."""
        ...


class ISleeper(ABC):
    """Abstract interface for cooperative suspension between requests."""

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Suspend the current task for the given number of seconds."""
        ...
