"""JSON file sink for exporting reports to files."""

import json
from pathlib import Path
from typing import Any

from loan_reports.exceptions import SinkError
from loan_reports.models.report import ReportAggregate
from loan_reports.sinks.serialization import report_to_dict, to_dict


class JsonFileSink:
    """Output records and reports to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to ``<entity_type>.json``."""
        data = [to_dict(record) for record in records]
        self._dump(self.output_dir / f"{entity_type}.json", data)
        self._counts[entity_type] = len(records)

    def write_report(self, report: ReportAggregate) -> Path:
        """Write a report to ``<type>_<start>_<end>.json`` and return the path."""
        period = report.period
        file_path = self.output_dir / (
            f"{report.report_type.value}_{period.start.isoformat()}_{period.end.isoformat()}.json"
        )
        self._dump(file_path, report_to_dict(report))
        self._counts["reports"] = self._counts.get("reports", 0) + 1
        return file_path

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")

    def _dump(self, file_path: Path, data: Any) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as e:
            raise SinkError(f"Cannot write {file_path}: {e}") from e
