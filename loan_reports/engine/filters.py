"""Select the corrections that belong to a reporting period."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from loan_reports.models.correction import Correction
from loan_reports.models.enums import CorrectionKind
from loan_reports.models.period import ReportingPeriod


def filter_corrections(
    corrections: Iterable[Correction],
    period: ReportingPeriod,
    kind: CorrectionKind = CorrectionKind.DISBURSEMENT,
) -> list[Correction]:
    """Keep corrections of ``kind`` whose effective date lies in ``period``.

    The input order is preserved; the engine relies on it.
    """
    return [c for c in corrections if c.kind == kind and period.contains(c.effective_date)]


def by_day(
    corrections: Iterable[Correction],
    day: date,
    kind: CorrectionKind = CorrectionKind.DISBURSEMENT,
) -> list[Correction]:
    return filter_corrections(corrections, ReportingPeriod.day(day), kind)


def by_month(
    corrections: Iterable[Correction],
    year: int,
    month: int,
    kind: CorrectionKind = CorrectionKind.DISBURSEMENT,
) -> list[Correction]:
    return filter_corrections(corrections, ReportingPeriod.month(year, month), kind)


def by_year(
    corrections: Iterable[Correction],
    year: int,
    kind: CorrectionKind = CorrectionKind.DISBURSEMENT,
) -> list[Correction]:
    return filter_corrections(corrections, ReportingPeriod.year(year), kind)


def by_range(
    corrections: Iterable[Correction],
    start: date | None,
    end: date | None,
    kind: CorrectionKind = CorrectionKind.DISBURSEMENT,
) -> list[Correction]:
    """Range filter; an open bound selects nothing."""
    if start is None or end is None:
        return []
    return filter_corrections(corrections, ReportingPeriod.between(start, end), kind)
