"""Loan application (origination record) model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class LoanApplication:
    """One loan application as known to the origination system.

    ``code`` is the natural key: corrections target it and reports
    deduplicate on it. Records with a negative ``id`` were synthesized by
    the reconciliation engine and have no upstream counterpart.
    """

    id: int
    code: str
    status: int  # ApplicationStatus value; unknown codes are kept as-is
    customer_name: str = ""
    loan_amount: Decimal = Decimal("0")  # Requested
    loan_term_months: int = 0
    disbursed_amount: Decimal = Decimal("0")
    approved_term_months: int = 0
    commission_amount: Decimal = Decimal("0")
    product_type_name: str | None = None
    province: str | None = None
    legal_document_type_code: str | None = None
    legal_document_type_name: str | None = None
    source_channel_name: str | None = None
    country_id: int | None = None
    country_name: str | None = None
    country_en: str | None = None
    created_at: datetime | None = None
    disbursement_date: date | None = None

    @property
    def is_synthesized(self) -> bool:
        return self.id < 0
