"""Plain filtered sums over the payment ledger (statements, fees, schedules)."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Sequence, TypeVar

from loan_reports.models.correction import Correction
from loan_reports.models.enums import CorrectionKind, ScheduleType
from loan_reports.models.ledger import LoanSchedule, ServiceFee, Statement
from loan_reports.models.period import ReportingPeriod
from loan_reports.models.report import PotentialAmounts, ServiceFeeTotals, StatementTotals

_ZERO = Decimal("0")

PaidItem = TypeVar("PaidItem", Statement, ServiceFee)


def _total(values: Iterable[Decimal | None]) -> Decimal:
    return sum((v or _ZERO for v in values), _ZERO)


def filter_by_payment_period(items: Iterable[PaidItem], period: ReportingPeriod) -> list[PaidItem]:
    """Keep items paid inside ``period``; items without a payment date are dropped."""
    return [item for item in items if period.contains(item.payment_date)]


def statement_totals(statements: Sequence[Statement]) -> StatementTotals:
    """Sum every amount column of the statement ledger."""
    return StatementTotals(
        collected_interest=_total(s.interest_amount for s in statements),
        collected_fees=_total(s.management_fee for s in statements),
        collected_principal=_total(s.principal_amount for s in statements),
        overdue_fees=_total(s.overdue_fee for s in statements),
        settlement_fees=_total(s.settlement_fee for s in statements),
        remaining_amount=_total(s.remaining_amount for s in statements),
        vat=_total(s.vat_amount for s in statements),
        interest_vat=_total(s.interest_vat for s in statements),
        management_fee_vat=_total(s.management_fee_vat for s in statements),
        settlement_fee_vat=_total(s.settlement_fee_vat for s in statements),
    )


def service_fee_totals(fees: Sequence[ServiceFee]) -> ServiceFeeTotals:
    """Collected service fees, their VAT, and the fees net of VAT."""
    return ServiceFeeTotals(
        collected=_total(f.total_amount for f in fees),
        vat=_total(f.vat_amount for f in fees),
        excluding_vat=_total((f.appraisal_fee or _ZERO) + (f.disbursement_fee or _ZERO) for f in fees),
    )


def apply_fee_corrections(
    totals: ServiceFeeTotals,
    corrections: Iterable[Correction],
) -> ServiceFeeTotals:
    """Add service-fee corrections to the collected amount.

    Disbursement corrections are ignored here. The caller restricts
    ``corrections`` to the reporting period.
    """
    delta = _total(c.signed_amount for c in corrections if c.kind == CorrectionKind.SERVICE_FEE)
    return replace(
        totals,
        collected=totals.collected + delta,
        corrections=totals.corrections + delta,
    )


def overdue_debt(schedules: Iterable[LoanSchedule]) -> Decimal:
    """Remaining amount on schedule lines not yet settled."""
    return _total(s.remain_amount for s in schedules if not s.detail)


def potential_amounts(schedules: Iterable[LoanSchedule]) -> PotentialAmounts:
    """Interest and fees still to be collected on interest and fee lines."""
    interest = _ZERO
    fees = _ZERO
    for s in schedules:
        outstanding = max(_ZERO, (s.pay_amount or _ZERO) - (s.paid_amount or _ZERO))
        if s.schedule_type == ScheduleType.INTEREST:
            interest += outstanding
        elif s.schedule_type == ScheduleType.FEE:
            fees += outstanding
    return PotentialAmounts(potential_interest=interest, potential_fees=fees)


def estimated_profit(schedules: Iterable[LoanSchedule]) -> Decimal:
    """Scheduled interest plus scheduled fees."""
    return _total(
        s.pay_amount
        for s in schedules
        if s.schedule_type in (ScheduleType.INTEREST, ScheduleType.FEE)
    )


def gross_revenue(statements: StatementTotals, service_fees: ServiceFeeTotals) -> Decimal:
    """Interest, management, overdue and settlement fees plus service fees."""
    return (
        statements.collected_interest
        + statements.collected_fees
        + statements.overdue_fees
        + statements.settlement_fees
        + service_fees.collected
    )
