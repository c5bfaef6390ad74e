"""Custom exception hierarchy for loan-reports."""


class LoanReportsError(Exception):
    """Base exception for all loan-reports errors."""


class ConfigurationError(LoanReportsError):
    """Raised when configuration is invalid or missing."""


class InvalidPeriodError(LoanReportsError):
    """Raised when a reporting period has inverted or missing bounds."""


class SourceError(LoanReportsError):
    """Raised when an upstream data source cannot be read."""


class SinkError(LoanReportsError):
    """Raised when a sink operation fails."""
