"""Output sinks for exporting report aggregates."""

from loan_reports.sinks.console import ConsoleSink
from loan_reports.sinks.json_file import JsonFileSink
from loan_reports.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
