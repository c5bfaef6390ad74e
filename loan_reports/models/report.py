"""Report-ready shapes handed to chart and table rendering."""

from dataclasses import dataclass, field
from decimal import Decimal

from loan_reports.models.application import LoanApplication
from loan_reports.models.enums import ReportType
from loan_reports.models.period import ReportingPeriod


@dataclass
class NamedCount:
    """A single bar or pie slice: a bucket name and its tally."""

    name: str
    value: int


@dataclass
class LoanStatistics:
    """Scalar totals over a set of applications."""

    loan_amount: Decimal = Decimal("0")
    total_commission: Decimal = Decimal("0")
    average_term: int = 0
    commission_count: int = 0


@dataclass
class StatementTotals:
    """Sums over the statement ledger for a period."""

    collected_interest: Decimal = Decimal("0")
    collected_fees: Decimal = Decimal("0")  # Management fees
    collected_principal: Decimal = Decimal("0")
    overdue_fees: Decimal = Decimal("0")
    settlement_fees: Decimal = Decimal("0")
    remaining_amount: Decimal = Decimal("0")
    vat: Decimal = Decimal("0")
    interest_vat: Decimal = Decimal("0")
    management_fee_vat: Decimal = Decimal("0")
    settlement_fee_vat: Decimal = Decimal("0")


@dataclass
class ServiceFeeTotals:
    """Sums over collected service fees for a period."""

    collected: Decimal = Decimal("0")
    vat: Decimal = Decimal("0")
    excluding_vat: Decimal = Decimal("0")
    corrections: Decimal = Decimal("0")


@dataclass
class PotentialAmounts:
    """Outstanding amounts still due on schedule lines."""

    potential_interest: Decimal = Decimal("0")
    potential_fees: Decimal = Decimal("0")


@dataclass
class MonthlyAggregate:
    """One month of a yearly report, reconciled in isolation."""

    month: int  # 1..12
    status_counts: dict[str, int] = field(default_factory=dict)
    source_counts: list[NamedCount] = field(default_factory=list)
    loan_amount: Decimal = Decimal("0")
    disbursed_count: int = 0
    records: list[LoanApplication] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"Month {self.month}"


@dataclass
class MonthlyFinancials:
    """Ledger figures for one month of a yearly report."""

    month: int
    collected_fees: Decimal = Decimal("0")
    collected_interest: Decimal = Decimal("0")
    collected_service_fees: Decimal = Decimal("0")
    gross_revenue: Decimal = Decimal("0")


@dataclass
class ReportAggregate:
    """Common envelope of every report.

    ``reconciled_count`` and ``disbursed_total`` pass through the size and
    sum of the reconciled record set; ``warnings`` collects notices about
    sources that could not be read (their data is then empty).
    """

    period: ReportingPeriod
    report_type: ReportType
    reconciled_count: int = 0
    disbursed_total: Decimal = Decimal("0")
    warnings: list[str] = field(default_factory=list)


@dataclass
class DailyReport(ReportAggregate):
    total_applications: int = 0
    total_rejected: int = 0
    statistics: LoanStatistics = field(default_factory=LoanStatistics)
    legal_documents: list[NamedCount] = field(default_factory=list)
    regions: list[NamedCount] = field(default_factory=list)
    status_counts: dict[str, int] = field(default_factory=dict)
    product_types: list[NamedCount] = field(default_factory=list)
    sources: list[NamedCount] = field(default_factory=list)
    statement_totals: StatementTotals = field(default_factory=StatementTotals)
    service_fee_totals: ServiceFeeTotals = field(default_factory=ServiceFeeTotals)
    potential: PotentialAmounts = field(default_factory=PotentialAmounts)
    overdue_debt: Decimal = Decimal("0")
    estimated_profit: Decimal = Decimal("0")
    gross_revenue: Decimal = Decimal("0")


@dataclass
class DateRangeReport(ReportAggregate):
    total_applications: int = 0
    total_rejected: int = 0
    statistics: LoanStatistics = field(default_factory=LoanStatistics)
    legal_documents: list[NamedCount] = field(default_factory=list)
    regions: list[NamedCount] = field(default_factory=list)
    status_counts: dict[str, int] = field(default_factory=dict)
    product_types: list[NamedCount] = field(default_factory=list)
    sources: list[NamedCount] = field(default_factory=list)
    statement_totals: StatementTotals = field(default_factory=StatementTotals)
    service_fee_totals: ServiceFeeTotals = field(default_factory=ServiceFeeTotals)
    gross_revenue: Decimal = Decimal("0")


@dataclass
class MonthlyReport(ReportAggregate):
    year: int = 0
    total_loans: int = 0
    total_loan_amount: Decimal = Decimal("0")
    total_commission: Decimal = Decimal("0")
    months: list[MonthlyAggregate] = field(default_factory=list)
    financials: list[MonthlyFinancials] = field(default_factory=list)
    regions: list[NamedCount] = field(default_factory=list)
    product_types: list[NamedCount] = field(default_factory=list)

    @property
    def average_loans_per_month(self) -> float:
        return self.total_loans / 12

    @property
    def average_amount_per_month(self) -> Decimal:
        return self.total_loan_amount / 12
