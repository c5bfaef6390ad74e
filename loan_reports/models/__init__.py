"""Domain models for loan back-office reporting."""

from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.enums import (
    LEGAL_DOCUMENT_NAMES,
    STATUS_LABELS,
    ApplicationStatus,
    CorrectionKind,
    LegalDocumentType,
    ReportType,
    ScheduleType,
    SourceChannel,
)
from loan_reports.models.ledger import LoanSchedule, ServiceFee, Statement
from loan_reports.models.period import DateField, PeriodFilter, ReportingPeriod
from loan_reports.models.report import (
    DailyReport,
    DateRangeReport,
    LoanStatistics,
    MonthlyAggregate,
    MonthlyFinancials,
    MonthlyReport,
    NamedCount,
    PotentialAmounts,
    ReportAggregate,
    ServiceFeeTotals,
    StatementTotals,
)

__all__ = [
    "LEGAL_DOCUMENT_NAMES",
    "STATUS_LABELS",
    "ApplicationStatus",
    "Correction",
    "CorrectionKind",
    "DailyReport",
    "DateField",
    "DateRangeReport",
    "LegalDocumentType",
    "LoanApplication",
    "LoanSchedule",
    "LoanStatistics",
    "MonthlyAggregate",
    "MonthlyFinancials",
    "MonthlyReport",
    "NamedCount",
    "PeriodFilter",
    "PotentialAmounts",
    "ReportAggregate",
    "ReportType",
    "ReportingPeriod",
    "ScheduleType",
    "ServiceFee",
    "SourceChannel",
    "Statement",
    "ServiceFeeTotals",
    "StatementTotals",
]
