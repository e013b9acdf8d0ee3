"""Clock abstraction supplying "today" in the court district time zone."""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current calendar date."""

    def today(self) -> date: ...

    def current_year(self) -> int: ...


class SystemClock:
    """Wall clock localized to the configured application time zone."""

    def __init__(self, timezone: str = "America/Sao_Paulo") -> None:
        self._timezone = ZoneInfo(timezone)

    def today(self) -> date:
        return datetime.now(tz=self._timezone).date()

    def current_year(self) -> int:
        return self.today().year


class FixedClock:
    """Clock pinned to one date."""

    def __init__(self, today: date) -> None:
        self._today = today

    def today(self) -> date:
        return self._today

    def current_year(self) -> int:
        return self._today.year
