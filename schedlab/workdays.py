from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from schedlab.loader import read_document

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class CalendarError(ValueError):
    pass


@dataclass(frozen=True)
class WorkCalendar:
    """Which dates count as working days.

    `work_days` holds `date.weekday()` numbers (Monday is 0).
    """

    work_days: frozenset[int] = frozenset(range(5))
    holidays: frozenset[dt.date] = frozenset()

    @staticmethod
    def from_mapping(obj: dict[str, Any]) -> "WorkCalendar":
        names = obj.get("work_days")
        if names is None:
            work_days = frozenset(range(5))
        else:
            days: set[int] = set()
            for name in names:
                key = str(name).strip().lower()
                if key not in WEEKDAYS:
                    raise CalendarError(f"unknown weekday '{name}'")
                days.add(WEEKDAYS.index(key))
            work_days = frozenset(days)
        if not work_days:
            raise CalendarError("work_days must name at least one weekday")

        holidays: set[dt.date] = set()
        for item in obj.get("holidays") or []:
            if isinstance(item, dt.date):
                holidays.add(item)
                continue
            try:
                holidays.add(dt.date.fromisoformat(str(item)))
            except ValueError as exc:
                raise CalendarError(f"bad holiday date '{item}'") from exc

        return WorkCalendar(work_days=work_days, holidays=frozenset(holidays))

    def is_workday(self, day: dt.date) -> bool:
        return day.weekday() in self.work_days and day not in self.holidays

    def compute_end_date(
        self, start: dt.date, workdays: float
    ) -> tuple[dt.date, dt.timedelta]:
        """Project `workdays` of effort onto the calendar from `start`.

        Partial days are dropped. Returns the date of the last working day used
        and the calendar span from `start` to that date.
        """

        remaining = int(workdays)
        if remaining <= 0:
            return start, dt.timedelta(0)

        day = start
        while True:
            if self.is_workday(day):
                remaining -= 1
                if remaining == 0:
                    return day, day - start
            day += dt.timedelta(days=1)


def load_calendar(path: Path) -> WorkCalendar:
    raw = read_document(path)
    if raw is None:
        return WorkCalendar()
    if not isinstance(raw, dict):
        raise CalendarError(f"{path}: top level must be a mapping")
    return WorkCalendar.from_mapping(raw)
