"""Reporting period model."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from loan_reports.exceptions import InvalidPeriodError


class DateField(str, Enum):
    """Which application date a period filter applies to."""

    CREATED = "created_at"
    DISBURSED = "disbursement_date"


@dataclass(frozen=True)
class ReportingPeriod:
    """Inclusive date interval a report is computed over."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start is None or self.end is None:
            raise InvalidPeriodError("Reporting period needs both a start and an end date")
        if self.end < self.start:
            raise InvalidPeriodError(f"Period end {self.end} is before start {self.start}")

    @classmethod
    def day(cls, day: date) -> ReportingPeriod:
        return cls(day, day)

    @classmethod
    def month(cls, year: int, month: int) -> ReportingPeriod:
        last = calendar.monthrange(year, month)[1]
        return cls(date(year, month, 1), date(year, month, last))

    @classmethod
    def year(cls, year: int) -> ReportingPeriod:
        return cls(date(year, 1, 1), date(year, 12, 31))

    @classmethod
    def between(cls, start: date, end: date) -> ReportingPeriod:
        return cls(start, end)

    def contains(self, value: date | datetime | None) -> bool:
        """Check whether a date (or the date part of a datetime) falls in the period."""
        if value is None:
            return False
        if isinstance(value, datetime):
            value = value.date()
        return self.start <= value <= self.end

    def months(self) -> list[tuple[int, int]]:
        """List the (year, month) pairs the period touches, in order."""
        result = []
        year, month = self.start.year, self.start.month
        while (year, month) <= (self.end.year, self.end.month):
            result.append((year, month))
            year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        return result

    def __str__(self) -> str:
        if self.start == self.end:
            return self.start.isoformat()
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


@dataclass(frozen=True)
class PeriodFilter:
    """A period plus the application date it filters on."""

    period: ReportingPeriod
    field: DateField = DateField.CREATED

    def matches(self, record: object) -> bool:
        return self.period.contains(getattr(record, self.field.value, None))
