"""Report assemblers: fetch, reconcile and aggregate one reporting period."""

from loan_reports.reports.base import ReportAssembler
from loan_reports.reports.daily import DailyReportAssembler
from loan_reports.reports.date_range import DateRangeReportAssembler
from loan_reports.reports.monthly import MonthlyReportAssembler, monthly_financials

__all__ = [
    "DailyReportAssembler",
    "DateRangeReportAssembler",
    "MonthlyReportAssembler",
    "ReportAssembler",
    "monthly_financials",
]
