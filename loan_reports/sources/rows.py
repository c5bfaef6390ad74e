"""Convert raw upstream rows into domain models.

The origination API returns flat rows keyed by Django-style lookups
(``loanapp__disbursement``, ``product__type__en``, ...); the correction,
statement and fee tables use their own column names. Missing numbers read
as zero and missing text as ``None``.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from loan_reports.exceptions import SourceError
from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.enums import CorrectionKind, ScheduleType
from loan_reports.models.ledger import LoanSchedule, ServiceFee, Statement


def parse_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise SourceError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise SourceError(f"Not a finite number: {value!r}")
    return result


def parse_date(value: Any) -> date | None:
    """Parse ``YYYY-MM-DD`` or an ISO timestamp (date part only)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise SourceError(f"Not a date: {value!r}") from e


def parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise SourceError(f"Not a timestamp: {value!r}") from e


def _text(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None


def _int(value: Any, default: int | None = 0) -> int | None:
    if value in (None, ""):
        return default
    return int(value)


def application_from_row(row: dict[str, Any]) -> LoanApplication:
    """Build an application from an origination API row."""
    try:
        return LoanApplication(
            id=int(row["id"]),
            code=str(row["code"]),
            status=int(row.get("status") or 0),
            customer_name=row.get("fullname") or "",
            loan_amount=parse_decimal(row.get("loan_amount")),
            loan_term_months=_int(row.get("loan_term")),
            disbursed_amount=parse_decimal(row.get("loanapp__disbursement")),
            approved_term_months=_int(row.get("approve_term")),
            commission_amount=parse_decimal(row.get("commission")),
            product_type_name=_text(row.get("product__type__en")),
            province=_text(row.get("province")),
            legal_document_type_code=_text(row.get("legal_type__code")),
            legal_document_type_name=_text(row.get("legal_type__name")),
            source_channel_name=_text(row.get("source__name")),
            country_id=_int(row.get("country"), None),
            country_name=_text(row.get("country__name")),
            country_en=_text(row.get("country__en")),
            created_at=parse_datetime(row.get("create_time")),
            disbursement_date=parse_date(row.get("loanapp__dbm_entry__date")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SourceError(f"Malformed application row: {e}") from e


def correction_from_row(row: dict[str, Any]) -> Correction:
    """Build a correction from an ``excluded_disbursements`` row."""
    try:
        effective = parse_date(row["date"])
        if effective is None:
            raise ValueError("date is empty")
        commission = row.get("commission")
        return Correction(
            correction_id=str(row["id"]),
            target_code=str(row["related_ap_code"]),
            effective_date=effective,
            signed_amount=parse_decimal(row["amount"]),
            kind=CorrectionKind(row.get("type") or CorrectionKind.DISBURSEMENT.value),
            loan_code=_text(row.get("related_ln_code")),
            reason=row.get("reason") or "",
            reference_month=_text(row.get("reference_month")),
            approved_term_months=_int(row.get("approve_term"), None),
            commission_amount=parse_decimal(commission) if commission not in (None, "") else None,
            country_id=_int(row.get("country"), None),
            country_name=_text(row.get("country__name")),
            country_en=_text(row.get("country__en")),
            legal_document_type_code=_text(row.get("legal_type__code")),
            legal_document_type_name=_text(row.get("legal_type__name")),
            province=_text(row.get("province")),
            product_type_name=_text(row.get("product__type__en")),
            source_channel_name=_text(row.get("source__name")),
            customer_name=_text(row.get("fullname")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SourceError(f"Malformed correction row: {e}") from e


def statement_from_row(row: dict[str, Any]) -> Statement:
    try:
        return Statement(
            statement_id=str(row["id"]),
            loan_id=str(row["loan_id"]),
            payment_date=parse_date(row.get("payment_date")),
            principal_amount=parse_decimal(row.get("principal_amount")),
            interest_amount=parse_decimal(row.get("interest_amount")),
            management_fee=parse_decimal(row.get("management_fee")),
            overdue_fee=parse_decimal(row.get("overdue_fee")),
            settlement_fee=parse_decimal(row.get("settlement_fee")),
            remaining_amount=parse_decimal(row.get("remaining_amount")),
            vat_amount=parse_decimal(row.get("vat_amount")),
            interest_vat=parse_decimal(row.get("interest_vat")),
            management_fee_vat=parse_decimal(row.get("management_fee_vat")),
            settlement_fee_vat=parse_decimal(row.get("settlement_fee_vat")),
        )
    except KeyError as e:
        raise SourceError(f"Malformed statement row: missing {e}") from e


def service_fee_from_row(row: dict[str, Any]) -> ServiceFee:
    try:
        return ServiceFee(
            fee_id=str(row["id"]),
            loan_id=str(row["loan_id"]),
            payment_date=parse_date(row.get("payment_date")),
            appraisal_fee=parse_decimal(row.get("appraisal_fee")),
            appraisal_fee_vat=parse_decimal(row.get("appraisal_fee_vat")),
            disbursement_fee=parse_decimal(row.get("disbursement_fee")),
            disbursement_fee_vat=parse_decimal(row.get("disbursement_fee_vat")),
            vat_amount=parse_decimal(row.get("vat_amount")),
            total_amount=parse_decimal(row.get("total_amount")),
            note=row.get("note") or "",
        )
    except KeyError as e:
        raise SourceError(f"Malformed service fee row: missing {e}") from e


def schedule_from_row(row: dict[str, Any]) -> LoanSchedule:
    try:
        return LoanSchedule(
            schedule_id=str(row["id"]),
            loan_code=str(row.get("loan") or ""),
            schedule_type=ScheduleType(row["type__en"]),
            due_date=parse_date(row["to_date"]),
            pay_amount=parse_decimal(row.get("pay_amount")),
            paid_amount=parse_decimal(row.get("paid_amount")),
            remain_amount=parse_decimal(row.get("remain_amount")),
            overdue_amount=parse_decimal(row.get("ovd_amount")),
            interest_income=parse_decimal(row.get("itr_income")),
            detail=_text(row.get("detail")),
        )
    except (KeyError, ValueError) as e:
        raise SourceError(f"Malformed schedule row: {e}") from e
