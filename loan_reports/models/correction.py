"""Correction (adjustment) model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from loan_reports.models.enums import CorrectionKind


@dataclass
class Correction:
    """Signed delta against one application's disbursed amount or service fee.

    The supplementary fields (term, commission, country, ...) are only read
    when the target application is absent and a record has to be synthesized.
    """

    correction_id: str
    target_code: str  # LoanApplication.code
    effective_date: date
    signed_amount: Decimal  # > 0 increases, < 0 decreases / cancels
    kind: CorrectionKind = CorrectionKind.DISBURSEMENT
    loan_code: str | None = None
    reason: str = ""
    reference_month: str | None = None  # YYYY-MM
    approved_term_months: int | None = None
    commission_amount: Decimal | None = None
    country_id: int | None = None
    country_name: str | None = None
    country_en: str | None = None
    legal_document_type_code: str | None = None
    legal_document_type_name: str | None = None
    province: str | None = None
    product_type_name: str | None = None
    source_channel_name: str | None = None
    customer_name: str | None = None

    def __post_init__(self) -> None:
        if self.reference_month is None:
            self.reference_month = self.effective_date.strftime("%Y-%m")
