"""Interfaces of the data sources the report assemblers read from."""

from typing import Protocol

from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.ledger import LoanSchedule, ServiceFee, Statement
from loan_reports.models.period import PeriodFilter, ReportingPeriod


class OriginationSource(Protocol):
    """Loan applications from the origination system."""

    def list_records(self, period_filter: PeriodFilter) -> list[LoanApplication]:
        """Applications whose creation or disbursement date matches the filter."""
        ...


class CorrectionStore(Protocol):
    """Durable log of manual corrections."""

    def list_corrections(self) -> list[Correction]:
        """Every correction, unfiltered, in application order."""
        ...


class LedgerSource(Protocol):
    """Statement, service-fee and schedule ledgers."""

    def list_statements(self, period: ReportingPeriod) -> list[Statement]:
        ...

    def list_service_fees(self, period: ReportingPeriod) -> list[ServiceFee]:
        ...

    def list_schedules(self, period: ReportingPeriod) -> list[LoanSchedule]:
        """Schedule lines due inside the period."""
        ...
