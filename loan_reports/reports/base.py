"""Shared plumbing for the report assemblers."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable

from loan_reports.aggregation import (
    apply_fee_corrections,
    count_by_status,
    disbursed_only,
    filter_by_payment_period,
    gross_revenue,
    legal_document_breakdown,
    loan_statistics,
    product_type_breakdown,
    region_breakdown,
    service_fee_totals,
    source_breakdown,
    statement_totals,
    sum_disbursed_amount,
)
from loan_reports.config import ReportingConfig
from loan_reports.engine import ApplicationTemplate, filter_corrections, reconcile
from loan_reports.exceptions import SourceError
from loan_reports.models.enums import ApplicationStatus, CorrectionKind
from loan_reports.models.period import ReportingPeriod
from loan_reports.models.report import DailyReport, DateRangeReport
from loan_reports.sources.base import CorrectionStore, LedgerSource, OriginationSource

logger = logging.getLogger(__name__)

# Source names, also used in the warnings shown to report readers
CREATED = "created applications"
DISBURSED = "disbursed applications"
CORRECTIONS = "corrections"
STATEMENTS = "statements"
SERVICE_FEES = "service fees"
SCHEDULES = "schedules"


class ReportAssembler:
    """Fetch a period's inputs, reconcile them and fold them into a report.

    Parameters
    ----------
    origination : OriginationSource
        Loan applications.
    corrections : CorrectionStore
        Manual correction log.
    ledger : LedgerSource
        Statements, service fees and schedules.
    config : ReportingConfig | None
        Reporting knobs (region top-N, fetch workers).
    template : ApplicationTemplate | None
        Defaults for records synthesized from corrections.
    """

    def __init__(
        self,
        origination: OriginationSource,
        corrections: CorrectionStore,
        ledger: LedgerSource,
        config: ReportingConfig | None = None,
        template: ApplicationTemplate | None = None,
    ) -> None:
        self.origination = origination
        self.corrections = corrections
        self.ledger = ledger
        self.config = config or ReportingConfig()
        self.template = template

    def _fetch_all(
        self,
        tasks: dict[str, Callable[[], list[Any]]],
    ) -> tuple[dict[str, list[Any]], list[str]]:
        """Run independent fetches concurrently and join them.

        A source that fails yields an empty list and a warning instead of
        failing the whole report.
        """
        results: dict[str, list[Any]] = {}
        warnings: list[str] = []

        with ThreadPoolExecutor(max_workers=self.config.fetch_workers, thread_name_prefix="fetch") as executor:
            futures = {executor.submit(fetch): name for name, fetch in tasks.items()}
            for future in as_completed(futures):
                name = futures[future]
                try:
                    results[name] = future.result()
                except (SourceError, OSError) as e:
                    logger.warning("Could not load %s: %s", name, e, exc_info=True)
                    results[name] = []
                    warnings.append(f"Could not load {name}: {e}")

        return results, sorted(warnings)

    def _fill_period_report(
        self,
        report: DailyReport | DateRangeReport,
        data: dict[str, list[Any]],
        period: ReportingPeriod,
        region_top_n: int | None,
    ) -> None:
        """Populate the fields daily and date-range reports share."""
        created = data[CREATED]
        corrections = data[CORRECTIONS]

        reconciled = reconcile(
            disbursed_only(data[DISBURSED]),
            filter_corrections(corrections, period),
            self.template,
        )

        statements = statement_totals(filter_by_payment_period(data[STATEMENTS], period))
        fees = apply_fee_corrections(
            service_fee_totals(filter_by_payment_period(data[SERVICE_FEES], period)),
            filter_corrections(corrections, period, CorrectionKind.SERVICE_FEE),
        )

        report.reconciled_count = len(reconciled)
        report.disbursed_total = sum_disbursed_amount(reconciled)
        report.total_applications = len(created)
        report.total_rejected = sum(1 for a in created if a.status == ApplicationStatus.REJECTED)
        report.statistics = loan_statistics(reconciled, commission_records=created)
        report.legal_documents = legal_document_breakdown(reconciled)
        report.regions = region_breakdown(reconciled, top_n=region_top_n)
        report.status_counts = count_by_status(created)
        report.product_types = product_type_breakdown(reconciled)
        report.sources = source_breakdown(created)
        report.statement_totals = statements
        report.service_fee_totals = fees
        report.gross_revenue = gross_revenue(statements, fees)
