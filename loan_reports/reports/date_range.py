"""Date-range report over an arbitrary inclusive interval."""

from __future__ import annotations

import logging
from datetime import date

from loan_reports.models.enums import ReportType
from loan_reports.models.period import DateField, PeriodFilter, ReportingPeriod
from loan_reports.models.report import DateRangeReport
from loan_reports.reports.base import (
    CORRECTIONS,
    CREATED,
    DISBURSED,
    SERVICE_FEES,
    STATEMENTS,
    ReportAssembler,
)

logger = logging.getLogger(__name__)


class DateRangeReportAssembler(ReportAssembler):
    """Build the date-range report.

    Same figures as the daily report without the schedule-based ones; the
    region breakdown keeps the configured top-N provinces.
    """

    def build(self, start: date | None, end: date | None) -> DateRangeReport:
        """Build the report for ``start..end`` (both inclusive).

        Raises
        ------
        InvalidPeriodError
            If a bound is missing or ``end`` precedes ``start``.
        """
        period = ReportingPeriod.between(start, end)
        logger.info("Building date-range report for %s", period)

        data, warnings = self._fetch_all(
            {
                CREATED: lambda: self.origination.list_records(PeriodFilter(period, DateField.CREATED)),
                DISBURSED: lambda: self.origination.list_records(PeriodFilter(period, DateField.DISBURSED)),
                CORRECTIONS: self.corrections.list_corrections,
                STATEMENTS: lambda: self.ledger.list_statements(period),
                SERVICE_FEES: lambda: self.ledger.list_service_fees(period),
            }
        )

        report = DateRangeReport(period=period, report_type=ReportType.DATE_RANGE, warnings=warnings)
        self._fill_period_report(report, data, period, region_top_n=self.config.region_top_n)

        logger.info(
            "Date-range report %s: %d applications, %d disbursed records, %d warnings",
            period,
            report.total_applications,
            report.reconciled_count,
            len(warnings),
            extra={"extra": {"report": report.report_type.value, "period": str(period)}},
        )
        return report
