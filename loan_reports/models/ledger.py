"""Payment ledger models: statements, service fees and repayment schedules."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from loan_reports.models.enums import ScheduleType


@dataclass
class Statement:
    """A repayment posted against a loan (one row of the statement ledger)."""

    statement_id: str
    loan_id: str
    payment_date: date | None
    principal_amount: Decimal = Decimal("0")
    interest_amount: Decimal = Decimal("0")
    management_fee: Decimal = Decimal("0")
    overdue_fee: Decimal = Decimal("0")
    settlement_fee: Decimal = Decimal("0")
    remaining_amount: Decimal = Decimal("0")
    vat_amount: Decimal = Decimal("0")
    interest_vat: Decimal = Decimal("0")
    management_fee_vat: Decimal = Decimal("0")
    settlement_fee_vat: Decimal = Decimal("0")


@dataclass
class ServiceFee:
    """Appraisal and disbursement fees collected for a loan."""

    fee_id: str
    loan_id: str
    payment_date: date | None
    appraisal_fee: Decimal = Decimal("0")
    appraisal_fee_vat: Decimal = Decimal("0")
    disbursement_fee: Decimal = Decimal("0")
    disbursement_fee_vat: Decimal = Decimal("0")
    vat_amount: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    note: str = ""


@dataclass
class LoanSchedule:
    """One repayment-schedule line (interest, fee or principal) of a loan."""

    schedule_id: str
    loan_code: str
    schedule_type: ScheduleType
    due_date: date
    pay_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    remain_amount: Decimal = Decimal("0")
    overdue_amount: Decimal = Decimal("0")
    interest_income: Decimal = Decimal("0")
    detail: str | None = None  # Non-empty once the line has been settled
