"""Faker-driven sample data for demos and tests."""

from loan_reports.generators.applications import ApplicationGenerator, CorrectionGenerator
from loan_reports.generators.base import BaseGenerator
from loan_reports.generators.ledger import ScheduleGenerator, ServiceFeeGenerator, StatementGenerator

__all__ = [
    "ApplicationGenerator",
    "BaseGenerator",
    "CorrectionGenerator",
    "ScheduleGenerator",
    "ServiceFeeGenerator",
    "StatementGenerator",
]
