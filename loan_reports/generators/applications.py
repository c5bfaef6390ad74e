"""Loan application and correction generators."""

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator, Sequence

from loan_reports.generators.base import BaseGenerator
from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.enums import (
    LEGAL_DOCUMENT_NAMES,
    ApplicationStatus,
    CorrectionKind,
    LegalDocumentType,
    SourceChannel,
)

PROVINCES = [
    "Hà Nội",
    "Hồ Chí Minh",
    "Đà Nẵng",
    "Hải Phòng",
    "Cần Thơ",
    "Bình Dương",
    "Đồng Nai",
    "Khánh Hòa",
    "Nghệ An",
    "Thanh Hóa",
    "Quảng Ninh",
    "Lâm Đồng",
    "Bắc Ninh",
    "Long An",
]

PRODUCT_TYPES = ["Unsecured Loan", "Secured Loan", "Salary Advance"]

TERMS = [3, 6, 9, 12, 18, 24]

# Weights follow a typical funnel: most applications end rejected or disbursed
STATUS_WEIGHTS = {
    ApplicationStatus.NEWLY_CREATED: 8,
    ApplicationStatus.PENDING_REVIEW: 8,
    ApplicationStatus.REQUEST_MORE_INFO: 4,
    ApplicationStatus.REJECTED: 20,
    ApplicationStatus.APPROVED: 6,
    ApplicationStatus.CONTRACT_SIGNED: 4,
    ApplicationStatus.DISBURSED: 50,
}

CORRECTION_REASONS = [
    "Bổ sung giải ngân",
    "Hủy giải ngân",
    "Điều chỉnh số tiền",
    "Giải ngân ngoài hệ thống",
]


class ApplicationGenerator(BaseGenerator):
    """Generate synthetic loan applications for one calendar year."""

    def __init__(self, seed: int | None = None, locale: str = "vi_VN") -> None:
        super().__init__(seed, locale)
        self._next_id = 1

    def generate(self, year: int, status: ApplicationStatus | None = None) -> LoanApplication:
        """Generate one application created in ``year``.

        Parameters
        ----------
        year : int
            Year the application is created in.
        status : ApplicationStatus | None
            Force a status; drawn from a funnel distribution otherwise.

        Returns
        -------
        LoanApplication
            Generated application. Disbursed applications carry a
            disbursement date within five days of creation (same year).
        """
        if status is None:
            status = random.choices(list(STATUS_WEIGHTS), weights=list(STATUS_WEIGHTS.values()))[0]

        app_id = self._next_id
        self._next_id += 1

        created_day = self.random_day(year)
        loan_amount = Decimal(random.randint(5, 100) * 1_000_000)
        term = random.choice(TERMS)
        legal = random.choices([LegalDocumentType.CCCD, LegalDocumentType.HC], weights=[9, 1])[0]

        disbursed = status == ApplicationStatus.DISBURSED
        disbursement_date = None
        commission = Decimal("0")
        if disbursed:
            disbursement_date = min(created_day + timedelta(days=random.randint(0, 5)), date(year, 12, 31))
            if random.random() < 0.3:  # Broker-introduced
                commission = loan_amount * Decimal("0.02")

        return LoanApplication(
            id=app_id,
            code=f"AP{year % 100:02d}{app_id:06d}",
            status=int(status),
            customer_name=self.fake.name(),
            loan_amount=loan_amount,
            loan_term_months=term,
            disbursed_amount=loan_amount if disbursed else Decimal("0"),
            approved_term_months=term if disbursed else 0,
            commission_amount=commission,
            product_type_name=random.choice(PRODUCT_TYPES),
            province=random.choice(PROVINCES),
            legal_document_type_code=legal.value,
            legal_document_type_name=LEGAL_DOCUMENT_NAMES[legal],
            source_channel_name=random.choice(list(SourceChannel)).value,
            country_id=1,
            country_name="Việt Nam",
            country_en="Vietnam",
            created_at=self.business_time(created_day),
            disbursement_date=disbursement_date,
        )

    def generate_batch(self, count: int, year: int) -> Iterator[LoanApplication]:
        """Generate ``count`` applications created in ``year``."""
        for _ in range(count):
            yield self.generate(year)


class CorrectionGenerator(BaseGenerator):
    """Generate manual corrections against a set of applications.

    A mix of top-ups and cancellations of existing disbursements, plus
    disbursements made outside the origination system (unknown codes) that
    the reconciliation engine has to synthesize.
    """

    def generate(
        self,
        applications: Sequence[LoanApplication],
        year: int,
        kind: CorrectionKind = CorrectionKind.DISBURSEMENT,
    ) -> Correction:
        """Generate one correction effective in ``year``.

        Parameters
        ----------
        applications : Sequence[LoanApplication]
            Candidate targets; only disbursed ones are used.
        year : int
            Year the correction takes effect in.
        kind : CorrectionKind
            Disbursement or service-fee correction.

        Returns
        -------
        Correction
            Generated correction.
        """
        disbursed = [a for a in applications if a.status == ApplicationStatus.DISBURSED and a.disbursement_date]
        roll = random.random()

        if kind == CorrectionKind.SERVICE_FEE:
            target = random.choice(disbursed) if disbursed else None
            return Correction(
                correction_id=self.fake.uuid4(),
                target_code=target.code if target else f"AP{year % 100:02d}9{random.randint(0, 99999):05d}",
                effective_date=target.disbursement_date if target else self.random_day(year),
                signed_amount=Decimal(random.choice([-1, 1]) * random.randint(1, 20) * 50_000),
                kind=kind,
                reason="Điều chỉnh phí dịch vụ",
            )

        if disbursed and roll < 0.7:
            target = random.choice(disbursed)
            if roll < 0.35:
                amount = Decimal(random.randint(1, 10) * 1_000_000)
            else:
                amount = -min(target.disbursed_amount, Decimal(random.randint(1, 120) * 1_000_000))
            return Correction(
                correction_id=self.fake.uuid4(),
                target_code=target.code,
                effective_date=target.disbursement_date,
                signed_amount=amount,
                reason=random.choice(CORRECTION_REASONS),
            )

        # Disbursement recorded only in the correction log
        legal = LegalDocumentType.CCCD
        return Correction(
            correction_id=self.fake.uuid4(),
            target_code=f"AP{year % 100:02d}9{random.randint(0, 99999):05d}",
            effective_date=self.random_day(year),
            signed_amount=Decimal(random.randint(5, 60) * 1_000_000),
            reason=CORRECTION_REASONS[3],
            approved_term_months=random.choice(TERMS),
            legal_document_type_code=legal.value,
            legal_document_type_name=LEGAL_DOCUMENT_NAMES[legal],
            province=random.choice(PROVINCES),
            product_type_name=random.choice(PRODUCT_TYPES),
            source_channel_name=random.choice(list(SourceChannel)).value,
            customer_name=self.fake.name(),
        )

    def generate_batch(
        self,
        applications: Sequence[LoanApplication],
        count: int,
        year: int,
        fee_ratio: float = 0.2,
    ) -> list[Correction]:
        """Generate ``count`` corrections, sorted by effective date.

        ``fee_ratio`` is the share of service-fee corrections.
        """
        corrections = []
        for _ in range(count):
            kind = CorrectionKind.SERVICE_FEE if random.random() < fee_ratio else CorrectionKind.DISBURSEMENT
            corrections.append(self.generate(applications, year, kind))
        corrections.sort(key=lambda c: c.effective_date)
        return corrections
