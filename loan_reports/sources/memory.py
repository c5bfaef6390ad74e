"""In-memory sources, used for sample data and tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.ledger import LoanSchedule, ServiceFee, Statement
from loan_reports.models.period import PeriodFilter, ReportingPeriod


@dataclass
class InMemoryOriginationSource:
    """Serve applications from a list, filtered like the origination API."""

    records: list[LoanApplication] = field(default_factory=list)

    def list_records(self, period_filter: PeriodFilter) -> list[LoanApplication]:
        return [r for r in self.records if period_filter.matches(r)]


@dataclass
class InMemoryCorrectionStore:
    """Correction log kept in insertion order."""

    corrections: list[Correction] = field(default_factory=list)

    def list_corrections(self) -> list[Correction]:
        return list(self.corrections)

    def add(self, correction: Correction) -> None:
        self.corrections.append(correction)

    def delete(self, correction_id: str) -> bool:
        """Remove a correction; returns False when it does not exist."""
        for i, correction in enumerate(self.corrections):
            if correction.correction_id == correction_id:
                del self.corrections[i]
                return True
        return False


@dataclass
class InMemoryLedgerSource:
    """Statements, service fees and schedules held in lists."""

    statements: list[Statement] = field(default_factory=list)
    service_fees: list[ServiceFee] = field(default_factory=list)
    schedules: list[LoanSchedule] = field(default_factory=list)

    def list_statements(self, period: ReportingPeriod) -> list[Statement]:
        return [s for s in self.statements if period.contains(s.payment_date)]

    def list_service_fees(self, period: ReportingPeriod) -> list[ServiceFee]:
        return [f for f in self.service_fees if period.contains(f.payment_date)]

    def list_schedules(self, period: ReportingPeriod) -> list[LoanSchedule]:
        return [s for s in self.schedules if period.contains(s.due_date)]
