"""Default implementations of infrastructure abstractions."""

import asyncio
from datetime import UTC, datetime

from vendor_gateway.infrastructure.ports.system import IClock, ISleeper


class SystemClock(IClock):
    """Default implementation using system time."""

    def now(self) -> datetime:
        """Get current local time."""
        return datetime.now()

    def utcnow(self) -> datetime:
        """Get current UTC time."""
        return datetime.now(UTC)


class AsyncioSleeper(ISleeper):
    """Default implementation backed by the running event loop."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
