"""Daily report: one calendar day of originations, disbursements and collections."""

from __future__ import annotations

import logging
from datetime import date

from loan_reports.aggregation import estimated_profit, overdue_debt, potential_amounts
from loan_reports.models.enums import ReportType
from loan_reports.models.period import DateField, PeriodFilter, ReportingPeriod
from loan_reports.models.report import DailyReport
from loan_reports.reports.base import (
    CORRECTIONS,
    CREATED,
    DISBURSED,
    SCHEDULES,
    SERVICE_FEES,
    STATEMENTS,
    ReportAssembler,
)

logger = logging.getLogger(__name__)


class DailyReportAssembler(ReportAssembler):
    """Build the daily report.

    Status, source and rejection counts cover applications created that day.
    Amounts, terms, regions and product types cover applications disbursed
    that day after reconciliation with the day's corrections. Schedule lines
    due that day feed overdue debt, potential amounts and estimated profit.
    """

    def build(self, day: date) -> DailyReport:
        period = ReportingPeriod.day(day)
        logger.info("Building daily report for %s", period)

        data, warnings = self._fetch_all(
            {
                CREATED: lambda: self.origination.list_records(PeriodFilter(period, DateField.CREATED)),
                DISBURSED: lambda: self.origination.list_records(PeriodFilter(period, DateField.DISBURSED)),
                CORRECTIONS: self.corrections.list_corrections,
                STATEMENTS: lambda: self.ledger.list_statements(period),
                SERVICE_FEES: lambda: self.ledger.list_service_fees(period),
                SCHEDULES: lambda: self.ledger.list_schedules(period),
            }
        )

        report = DailyReport(period=period, report_type=ReportType.DAILY, warnings=warnings)
        self._fill_period_report(report, data, period, region_top_n=None)

        schedules = [s for s in data[SCHEDULES] if period.contains(s.due_date)]
        report.overdue_debt = overdue_debt(schedules)
        report.potential = potential_amounts(schedules)
        report.estimated_profit = estimated_profit(schedules)

        logger.info(
            "Daily report %s: %d applications, %d disbursed records, %d warnings",
            period,
            report.total_applications,
            report.reconciled_count,
            len(warnings),
            extra={"extra": {"report": report.report_type.value, "period": str(period)}},
        )
        return report
