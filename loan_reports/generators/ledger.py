"""Statement, service-fee and schedule generators."""

from __future__ import annotations

import calendar
import random
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Iterator

from loan_reports.generators.base import BaseGenerator
from loan_reports.models.application import LoanApplication
from loan_reports.models.enums import ApplicationStatus, ScheduleType
from loan_reports.models.ledger import LoanSchedule, ServiceFee, Statement

VAT_RATE = Decimal("0.10")
MONTHLY_INTEREST = Decimal("0.015")
MONTHLY_MANAGEMENT_FEE = Decimal("0.005")
APPRAISAL_FEE_RATE = Decimal("0.01")
DISBURSEMENT_FEE_RATE = Decimal("0.005")


def _money(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def _repayment_dates(application: LoanApplication) -> list[date]:
    start = application.disbursement_date
    if start is None or application.status != ApplicationStatus.DISBURSED:
        return []
    return [_add_months(start, n) for n in range(1, (application.approved_term_months or 0) + 1)]


class StatementGenerator(BaseGenerator):
    """Generate repayments posted against disbursed applications."""

    def generate(self, application: LoanApplication, installment: int, payment_date: date) -> Statement:
        """Generate the statement of one monthly installment.

        Parameters
        ----------
        application : LoanApplication
            Disbursed application being repaid.
        installment : int
            1-based installment number.
        payment_date : date
            Date the repayment was posted.

        Returns
        -------
        Statement
            Generated statement; an occasional late payment carries an
            overdue fee, and the last installment may be an early settlement.
        """
        amount = application.disbursed_amount
        term = application.approved_term_months or 1
        principal = _money(amount / term)
        interest = _money(amount * MONTHLY_INTEREST)
        management = _money(amount * MONTHLY_MANAGEMENT_FEE)
        overdue = _money(interest * Decimal("0.5")) if random.random() < 0.1 else Decimal("0")
        settlement = _money(amount * Decimal("0.02")) if installment == term and random.random() < 0.2 else Decimal("0")

        interest_vat = _money(interest * VAT_RATE)
        management_vat = _money(management * VAT_RATE)
        settlement_vat = _money(settlement * VAT_RATE)

        return Statement(
            statement_id=self.fake.uuid4(),
            loan_id=application.code.replace("AP", "LN", 1),
            payment_date=payment_date,
            principal_amount=principal,
            interest_amount=interest,
            management_fee=management,
            overdue_fee=overdue,
            settlement_fee=settlement,
            remaining_amount=max(Decimal("0"), amount - principal * installment),
            vat_amount=interest_vat + management_vat + settlement_vat,
            interest_vat=interest_vat,
            management_fee_vat=management_vat,
            settlement_fee_vat=settlement_vat,
        )

    def generate_for(self, applications: Iterable[LoanApplication], until: date) -> Iterator[Statement]:
        """Generate every installment of ``applications`` paid on or before ``until``."""
        for application in applications:
            for n, due in enumerate(_repayment_dates(application), start=1):
                if due > until:
                    break
                yield self.generate(application, n, due)


class ServiceFeeGenerator(BaseGenerator):
    """Generate appraisal and disbursement fees collected at disbursement."""

    def generate(self, application: LoanApplication) -> ServiceFee:
        amount = application.disbursed_amount
        appraisal = _money(amount * APPRAISAL_FEE_RATE)
        disbursement = _money(amount * DISBURSEMENT_FEE_RATE)
        appraisal_vat = _money(appraisal * VAT_RATE)
        disbursement_vat = _money(disbursement * VAT_RATE)
        vat = appraisal_vat + disbursement_vat

        return ServiceFee(
            fee_id=self.fake.uuid4(),
            loan_id=application.code.replace("AP", "LN", 1),
            payment_date=application.disbursement_date,
            appraisal_fee=appraisal,
            appraisal_fee_vat=appraisal_vat,
            disbursement_fee=disbursement,
            disbursement_fee_vat=disbursement_vat,
            vat_amount=vat,
            total_amount=appraisal + disbursement + vat,
        )

    def generate_for(self, applications: Iterable[LoanApplication]) -> Iterator[ServiceFee]:
        for application in applications:
            if application.status == ApplicationStatus.DISBURSED and application.disbursement_date:
                yield self.generate(application)


class ScheduleGenerator(BaseGenerator):
    """Generate repayment-schedule lines (interest, fee, principal)."""

    def generate_for(self, applications: Iterable[LoanApplication], as_of: date) -> Iterator[LoanSchedule]:
        """Generate schedule lines, settling most of those due before ``as_of``.

        Parameters
        ----------
        applications : Iterable[LoanApplication]
            Applications to schedule; non-disbursed ones are skipped.
        as_of : date
            Lines due before this date are paid with 90% probability.

        Yields
        ------
        LoanSchedule
            One line per installment and schedule type.
        """
        for application in applications:
            amount = application.disbursed_amount
            term = application.approved_term_months or 1
            due_amounts = {
                ScheduleType.INTEREST: _money(amount * MONTHLY_INTEREST),
                ScheduleType.FEE: _money(amount * MONTHLY_MANAGEMENT_FEE),
                ScheduleType.PRINCIPAL: _money(amount / term),
            }
            for due in _repayment_dates(application):
                settled = due < as_of and random.random() < 0.9
                for schedule_type, pay in due_amounts.items():
                    paid = pay if settled else Decimal("0")
                    yield LoanSchedule(
                        schedule_id=self.fake.uuid4(),
                        loan_code=application.code.replace("AP", "LN", 1),
                        schedule_type=schedule_type,
                        due_date=due,
                        pay_amount=pay,
                        paid_amount=paid,
                        remain_amount=pay - paid,
                        overdue_amount=pay - paid if due < as_of else Decimal("0"),
                        interest_income=pay if schedule_type == ScheduleType.INTEREST else Decimal("0"),
                        detail="Settled" if settled else None,
                    )
