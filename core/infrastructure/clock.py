"""System clock adapter."""

from datetime import datetime, timezone

from core.application.interfaces import IClock


class SystemClock(IClock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
