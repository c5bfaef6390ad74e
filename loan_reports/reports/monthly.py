"""Monthly report: a calendar year split into twelve reconciled months."""

from __future__ import annotations

import logging
from decimal import Decimal

from loan_reports.aggregation import (
    apply_fee_corrections,
    disbursed_only,
    filter_by_payment_period,
    gross_revenue,
    month_bucket,
    product_type_breakdown,
    region_breakdown,
    service_fee_totals,
    statement_totals,
    sum_disbursed_amount,
)
from loan_reports.engine import by_month
from loan_reports.exceptions import InvalidPeriodError
from loan_reports.models.correction import Correction
from loan_reports.models.enums import CorrectionKind, ReportType
from loan_reports.models.ledger import ServiceFee, Statement
from loan_reports.models.period import DateField, PeriodFilter, ReportingPeriod
from loan_reports.models.report import MonthlyFinancials, MonthlyReport
from loan_reports.reports.base import CORRECTIONS, CREATED, SERVICE_FEES, STATEMENTS, ReportAssembler

logger = logging.getLogger(__name__)


def monthly_financials(
    year: int,
    statements: list[Statement],
    fees: list[ServiceFee],
    corrections: list[Correction],
) -> list[MonthlyFinancials]:
    """Collected fees, interest and service fees for each month of ``year``."""
    rows = []
    for month in range(1, 13):
        period = ReportingPeriod.month(year, month)
        totals = statement_totals(filter_by_payment_period(statements, period))
        fee_totals = apply_fee_corrections(
            service_fee_totals(filter_by_payment_period(fees, period)),
            by_month(corrections, year, month, CorrectionKind.SERVICE_FEE),
        )
        rows.append(
            MonthlyFinancials(
                month=month,
                collected_fees=totals.collected_fees,
                collected_interest=totals.collected_interest,
                collected_service_fees=fee_totals.collected,
                gross_revenue=gross_revenue(totals, fee_totals),
            )
        )
    return rows


class MonthlyReportAssembler(ReportAssembler):
    """Build the yearly report broken down by month.

    Every month is reconciled on its own against the corrections effective
    in that month, so the monthly loan amounts add up to the yearly total.
    """

    def build(self, year: int) -> MonthlyReport:
        if year < self.config.report_start_year:
            raise InvalidPeriodError(f"No reports before {self.config.report_start_year}, got {year}")
        period = ReportingPeriod.year(year)
        logger.info("Building monthly report for %d", year)

        data, warnings = self._fetch_all(
            {
                CREATED: lambda: self.origination.list_records(PeriodFilter(period, DateField.CREATED)),
                CORRECTIONS: self.corrections.list_corrections,
                STATEMENTS: lambda: self.ledger.list_statements(period),
                SERVICE_FEES: lambda: self.ledger.list_service_fees(period),
            }
        )
        applications = data[CREATED]

        months = month_bucket(applications, year, data[CORRECTIONS], self.template)
        reconciled = [record for month in months for record in month.records]
        disbursed = disbursed_only(reconciled)

        report = MonthlyReport(
            period=period,
            report_type=ReportType.MONTHLY,
            reconciled_count=len(reconciled),
            disbursed_total=sum_disbursed_amount(reconciled),
            warnings=warnings,
            year=year,
            total_loans=sum(m.disbursed_count for m in months),
            total_loan_amount=sum((m.loan_amount for m in months), Decimal("0")),
            total_commission=sum((r.commission_amount or Decimal("0") for r in disbursed), Decimal("0")),
            months=months,
            financials=monthly_financials(year, data[STATEMENTS], data[SERVICE_FEES], data[CORRECTIONS]),
            regions=region_breakdown(disbursed, top_n=self.config.region_top_n),
            product_types=product_type_breakdown(applications),
        )

        logger.info(
            "Monthly report %d: %d loans, total %s, %d warnings",
            year,
            report.total_loans,
            report.total_loan_amount,
            len(warnings),
            extra={"extra": {"report": report.report_type.value, "period": str(period)}},
        )
        return report
