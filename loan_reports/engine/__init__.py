"""Reconciliation of loan applications against manual corrections."""

from loan_reports.engine.filters import by_day, by_month, by_range, by_year, filter_corrections
from loan_reports.engine.reconciliation import (
    ApplicationTemplate,
    ReconciliationResult,
    reconcile,
    reconcile_with_diagnostics,
)

__all__ = [
    "ApplicationTemplate",
    "ReconciliationResult",
    "by_day",
    "by_month",
    "by_range",
    "by_year",
    "filter_corrections",
    "reconcile",
    "reconcile_with_diagnostics",
]
