"""Reducers that fold application sets into report-ready shapes.

Amount-based reducers expect a reconciled record set; pure counts (status,
source) are usually taken over the unreconciled applications.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Sequence

from loan_reports.engine.filters import by_month
from loan_reports.engine.reconciliation import ApplicationTemplate, reconcile
from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.enums import (
    LEGAL_DOCUMENT_NAMES,
    STATUS_LABELS,
    ApplicationStatus,
    LegalDocumentType,
    SourceChannel,
)
from loan_reports.models.report import LoanStatistics, MonthlyAggregate, NamedCount

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
OTHERS = "Others"

_ZERO = Decimal("0")


def sum_disbursed_amount(records: Iterable[LoanApplication]) -> Decimal:
    """Total disbursed amount, never below zero."""
    total = sum((r.disbursed_amount or _ZERO for r in records), _ZERO)
    return max(total, _ZERO)


def count_by_status(records: Iterable[LoanApplication]) -> dict[str, int]:
    """Count applications per status label.

    All seven statuses are present, in lifecycle order, even when zero.
    Unknown status codes are not counted.
    """
    counts = {label: 0 for label in STATUS_LABELS.values()}
    for record in records:
        try:
            label = STATUS_LABELS[ApplicationStatus(record.status)]
        except ValueError:
            continue
        counts[label] += 1
    return counts


def group_by_key(
    records: Iterable[LoanApplication],
    key_fn: Callable[[LoanApplication], str | None],
    seed_keys: Sequence[str] = (),
) -> list[NamedCount]:
    """Tally records per key, keeping first-seen key order.

    Parameters
    ----------
    records : Iterable[LoanApplication]
        Records to tally.
    key_fn : Callable
        Extracts the bucket name; empty or missing names go to ``"Unknown"``.
    seed_keys : Sequence[str]
        Buckets that always appear first, in this order, even when empty.

    Returns
    -------
    list[NamedCount]
        One entry per bucket; values sum to the number of records.
    """
    counts: dict[str, int] = {key: 0 for key in seed_keys}
    for record in records:
        key = key_fn(record) or UNKNOWN
        counts[key] = counts.get(key, 0) + 1
    return [NamedCount(name, value) for name, value in counts.items()]


def top_n_with_overflow(groups: Iterable[NamedCount], n: int) -> list[NamedCount]:
    """Keep the ``n`` largest groups and fold the rest into ``"Others"``.

    Ties keep their input order. The returned values sum to the input total.
    """
    ranked = sorted(groups, key=lambda g: g.value, reverse=True)
    n = max(n, 0)
    if len(ranked) <= n:
        return [NamedCount(g.name, g.value) for g in ranked]

    top = [NamedCount(g.name, g.value) for g in ranked[:n]]
    overflow = sum(g.value for g in ranked[n:])
    return [*top, NamedCount(OTHERS, overflow)]


def average_term(records: Iterable[LoanApplication]) -> int:
    """Mean approved term of disbursed applications, rounded half up; 0 when none."""
    terms = [r.approved_term_months or 0 for r in records if r.status == ApplicationStatus.DISBURSED]
    if not terms:
        return 0
    mean = Decimal(sum(terms)) / len(terms)
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def loan_statistics(
    records: Sequence[LoanApplication],
    commission_records: Sequence[LoanApplication] | None = None,
) -> LoanStatistics:
    """Scalar totals for summary cards.

    Parameters
    ----------
    records : Sequence[LoanApplication]
        Reconciled disbursed applications (amount and term).
    commission_records : Sequence[LoanApplication] | None
        Applications to take commission from. Defaults to ``records``.
    """
    if commission_records is None:
        commission_records = records
    return LoanStatistics(
        loan_amount=sum_disbursed_amount(records),
        total_commission=sum((r.commission_amount or _ZERO for r in commission_records), _ZERO),
        average_term=average_term(records),
        commission_count=sum(1 for r in commission_records if r.commission_amount),
    )


def legal_document_breakdown(records: Iterable[LoanApplication]) -> list[NamedCount]:
    """Applications per legal document; citizen ID and passport always listed."""

    def name(record: LoanApplication) -> str | None:
        try:
            return LEGAL_DOCUMENT_NAMES[LegalDocumentType(record.legal_document_type_code)]
        except ValueError:
            return record.legal_document_type_name

    return group_by_key(records, name, seed_keys=list(LEGAL_DOCUMENT_NAMES.values()))


def source_breakdown(records: Iterable[LoanApplication]) -> list[NamedCount]:
    """Applications per acquisition channel; Apps, CTV and Website always listed."""
    return group_by_key(
        records,
        lambda r: r.source_channel_name,
        seed_keys=[channel.value for channel in SourceChannel],
    )


def region_breakdown(
    records: Iterable[LoanApplication],
    top_n: int | None = None,
) -> list[NamedCount]:
    """Applications per province, largest first; long tails fold into Others."""
    groups = group_by_key(records, lambda r: r.province)
    if top_n is None:
        return groups
    return top_n_with_overflow(groups, top_n)


def product_type_breakdown(records: Iterable[LoanApplication]) -> list[NamedCount]:
    return group_by_key(records, lambda r: r.product_type_name)


def disbursed_only(records: Iterable[LoanApplication]) -> list[LoanApplication]:
    return [r for r in records if r.status == ApplicationStatus.DISBURSED]


def month_bucket(
    records: Sequence[LoanApplication],
    year: int,
    corrections: Sequence[Correction] = (),
    template: ApplicationTemplate | None = None,
) -> list[MonthlyAggregate]:
    """Split a year of applications into 12 independently reconciled months.

    Each month reconciles its disbursed applications (by creation month)
    against the disbursement corrections effective in that month only, so no
    correction is applied twice across month boundaries. Status and source
    counts cover every application created in the month.

    Parameters
    ----------
    records : Sequence[LoanApplication]
        Applications created in ``year`` (others are ignored).
    year : int
        Calendar year.
    corrections : Sequence[Correction]
        Unfiltered correction log; filtered per month here.
    template : ApplicationTemplate | None
        Defaults for synthesized records.

    Returns
    -------
    list[MonthlyAggregate]
        Exactly 12 entries, January first.
    """
    buckets: dict[int, list[LoanApplication]] = {month: [] for month in range(1, 13)}
    for record in records:
        created = record.created_at
        if created is not None and created.year == year:
            buckets[created.month].append(record)

    months = []
    for month, month_base in buckets.items():
        reconciled = reconcile(disbursed_only(month_base), by_month(corrections, year, month), template)
        months.append(
            MonthlyAggregate(
                month=month,
                status_counts=count_by_status(month_base),
                source_counts=source_breakdown(month_base),
                loan_amount=sum_disbursed_amount(reconciled),
                disbursed_count=len(disbursed_only(reconciled)),
                records=reconciled,
            )
        )

    logger.debug("Bucketed %d applications of %d into 12 months", len(records), year)
    return months
