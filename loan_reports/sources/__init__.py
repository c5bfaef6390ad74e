"""Data sources feeding the report assemblers."""

from loan_reports.sources.base import CorrectionStore, LedgerSource, OriginationSource
from loan_reports.sources.json_file import JsonCorrectionStore, JsonLedgerSource, JsonOriginationSource
from loan_reports.sources.memory import (
    InMemoryCorrectionStore,
    InMemoryLedgerSource,
    InMemoryOriginationSource,
)

__all__ = [
    "CorrectionStore",
    "InMemoryCorrectionStore",
    "InMemoryLedgerSource",
    "InMemoryOriginationSource",
    "JsonCorrectionStore",
    "JsonLedgerSource",
    "JsonOriginationSource",
    "LedgerSource",
    "OriginationSource",
]
