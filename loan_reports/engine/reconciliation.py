"""Disbursement reconciliation engine.

Applies out-of-band corrections to a snapshot of loan applications and
returns the record set every downstream aggregate is computed from.

Corrections are applied strictly in the order given. Two corrections for the
same code compose: a decrease that follows an increase sees the increased
balance, while a decrease that arrives before its target exists is skipped.

Per correction:

- positive amount, target present: add to ``disbursed_amount`` and move
  ``disbursement_date`` to the correction's effective date.
- positive amount, target absent: synthesize a disbursed record from the
  correction and an :class:`ApplicationTemplate`, with a negative id.
- negative amount, target present: remove the record when the reduction
  covers the whole balance (any excess is dropped), otherwise subtract.
- negative amount, target absent: skip. The target usually belongs to
  another reporting period.

Inputs are never mutated; touched records are replaced by copies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, time
from decimal import Decimal
from typing import Iterable, Sequence

from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.enums import (
    LEGAL_DOCUMENT_NAMES,
    ApplicationStatus,
    LegalDocumentType,
    SourceChannel,
)

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


@dataclass
class ApplicationTemplate:
    """Defaults for attributes a correction does not carry.

    Used when a positive correction has no target and a record must be
    synthesized. The defaults mirror what the back office pre-fills when a
    correction is entered.
    """

    status: int = ApplicationStatus.DISBURSED
    approved_term_months: int = 0
    commission_amount: Decimal = _ZERO
    country_id: int | None = 1
    country_name: str | None = "Việt Nam"
    country_en: str | None = "Vietnam"
    legal_document_type_code: str | None = LegalDocumentType.CCCD.value
    legal_document_type_name: str | None = LEGAL_DOCUMENT_NAMES[LegalDocumentType.CCCD]
    province: str | None = None
    product_type_name: str | None = "Unsecured Loan"
    source_channel_name: str | None = SourceChannel.WEBSITE.value
    customer_name: str | None = ""

    # Attributes a correction may supply; everything else comes from here.
    OVERRIDABLE = (
        "approved_term_months",
        "commission_amount",
        "country_id",
        "country_name",
        "country_en",
        "legal_document_type_code",
        "legal_document_type_name",
        "province",
        "product_type_name",
        "source_channel_name",
        "customer_name",
    )

    @classmethod
    def from_application(cls, application: LoanApplication) -> ApplicationTemplate:
        """Build a template that copies the attributes of an existing record."""
        return cls(
            status=application.status,
            approved_term_months=application.approved_term_months,
            commission_amount=application.commission_amount,
            country_id=application.country_id,
            country_name=application.country_name,
            country_en=application.country_en,
            legal_document_type_code=application.legal_document_type_code,
            legal_document_type_name=application.legal_document_type_name,
            province=application.province,
            product_type_name=application.product_type_name,
            source_channel_name=application.source_channel_name,
            customer_name=application.customer_name,
        )

    def build(self, correction: Correction, synthetic_id: int) -> LoanApplication:
        """Synthesize the application a positive correction stands for.

        Parameters
        ----------
        correction : Correction
            Correction with no matching application in the working set.
        synthetic_id : int
            Negative id to assign.

        Returns
        -------
        LoanApplication
            Disbursed record for ``correction.signed_amount``.
        """
        values = {}
        for name in self.OVERRIDABLE:
            supplied = getattr(correction, name)
            values[name] = getattr(self, name) if supplied in (None, "") else supplied

        return LoanApplication(
            id=synthetic_id,
            code=correction.target_code,
            status=self.status,
            loan_amount=correction.signed_amount,
            loan_term_months=values["approved_term_months"],
            disbursed_amount=correction.signed_amount,
            created_at=datetime.combine(correction.effective_date, time.min),
            disbursement_date=correction.effective_date,
            **values,
        )


@dataclass
class ReconciliationResult:
    """Reconciled records plus what happened to the corrections."""

    records: list[LoanApplication]
    unmatched: list[Correction] = field(default_factory=list)
    synthesized: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


def reconcile(
    base: Sequence[LoanApplication],
    corrections: Iterable[Correction],
    template: ApplicationTemplate | None = None,
) -> list[LoanApplication]:
    """Apply corrections to a snapshot of applications.

    Parameters
    ----------
    base : Sequence[LoanApplication]
        Applications for the reporting period. Not modified.
    corrections : Iterable[Correction]
        Disbursement corrections already filtered to the period, in the
        order they must be applied.
    template : ApplicationTemplate | None
        Defaults for synthesized records.

    Returns
    -------
    list[LoanApplication]
        Original, amended and synthesized records.
    """
    return reconcile_with_diagnostics(base, corrections, template).records


def reconcile_with_diagnostics(
    base: Sequence[LoanApplication],
    corrections: Iterable[Correction],
    template: ApplicationTemplate | None = None,
) -> ReconciliationResult:
    """Same as :func:`reconcile` but also reports skipped and synthesized codes."""
    template = template or ApplicationTemplate()
    working = list(base)
    result = ReconciliationResult(records=working)
    next_id = min((r.id for r in working if r.id < 0), default=0) - 1
    applied = 0

    for correction in corrections:
        amount = correction.signed_amount
        index = _find_index(working, correction.target_code)

        if amount > 0:
            if index is None:
                working.append(template.build(correction, next_id))
                next_id -= 1
                result.synthesized.append(correction.target_code)
            else:
                current = working[index]
                working[index] = replace(
                    current,
                    disbursed_amount=(current.disbursed_amount or _ZERO) + amount,
                    disbursement_date=correction.effective_date,
                )
            applied += 1

        elif amount < 0:
            if index is None:
                logger.debug(
                    "Skipping correction %s: no application %s in working set",
                    correction.correction_id,
                    correction.target_code,
                )
                result.unmatched.append(correction)
                continue

            current = working[index]
            balance = current.disbursed_amount or _ZERO
            reduction = -amount
            if reduction >= balance:
                del working[index]
                result.removed.append(correction.target_code)
            else:
                working[index] = replace(current, disbursed_amount=balance - reduction)
            applied += 1

    logger.debug(
        "Reconciled %d applications: %d corrections applied, %d synthesized, "
        "%d removed, %d unmatched",
        len(base),
        applied,
        len(result.synthesized),
        len(result.removed),
        len(result.unmatched),
    )
    return result


def _find_index(records: list[LoanApplication], code: str) -> int | None:
    """Position of the first record with ``code``."""
    for i, record in enumerate(records):
        if record.code == code:
            return i
    return None
