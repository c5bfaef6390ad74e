"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

import pytest

from loan_reports.models import ApplicationStatus, Correction, CorrectionKind, LoanApplication


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def make_app() -> Callable[..., LoanApplication]:
    """Factory for disbursed applications with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(code: str, amount: str | int = "1000", **overrides: Any) -> LoanApplication:
        app_id = next(counter)
        values: dict[str, Any] = {
            "id": app_id,
            "code": code,
            "status": int(ApplicationStatus.DISBURSED),
            "customer_name": f"Customer {app_id}",
            "loan_amount": Decimal(str(amount)),
            "loan_term_months": 12,
            "disbursed_amount": Decimal(str(amount)),
            "approved_term_months": 12,
            "product_type_name": "Unsecured Loan",
            "province": "Hà Nội",
            "legal_document_type_code": "CCCD",
            "legal_document_type_name": "Căn cước công dân",
            "source_channel_name": "Website",
            "created_at": datetime(2025, 3, 10, 9, 30),
            "disbursement_date": date(2025, 3, 10),
        }
        values.update(overrides)
        return LoanApplication(**values)

    return _make


@pytest.fixture
def make_correction() -> Callable[..., Correction]:
    """Factory for corrections effective on 2025-03-10 by default."""
    counter = iter(range(1, 10_000))

    def _make(
        target: str,
        amount: str | int,
        effective: date = date(2025, 3, 10),
        kind: CorrectionKind = CorrectionKind.DISBURSEMENT,
        **overrides: Any,
    ) -> Correction:
        return Correction(
            correction_id=f"corr-{next(counter):03d}",
            target_code=target,
            effective_date=effective,
            signed_amount=Decimal(str(amount)),
            kind=kind,
            **overrides,
        )

    return _make


@pytest.fixture
def correction_row() -> dict[str, Any]:
    """A row of the ``excluded_disbursements`` table."""
    return {
        "id": 7,
        "date": "2025-03-10",
        "related_ap_code": "AP25000123",
        "related_ln_code": "LN25000123",
        "amount": "5000000",
        "type": "disbursement",
        "reason": "Giải ngân ngoài hệ thống",
        "reference_month": "2025-03",
        "approve_term": 6,
        "commission": None,
        "country": 1,
        "country__name": "Việt Nam",
        "country__en": "Vietnam",
        "legal_type__code": "CCCD",
        "legal_type__name": "Căn cước công dân",
        "province": "Đà Nẵng",
        "product__type__en": "Secured Loan",
        "source__name": "CTV",
        "fullname": "Nguyễn Văn A",
    }
