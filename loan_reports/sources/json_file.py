"""Sources backed by JSON exports of the upstream tables.

Each file holds a JSON array of rows in the upstream column layout, the
same rows the origination API and the back-office database return.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from loan_reports.exceptions import SourceError
from loan_reports.models.application import LoanApplication
from loan_reports.models.correction import Correction
from loan_reports.models.ledger import LoanSchedule, ServiceFee, Statement
from loan_reports.models.period import PeriodFilter, ReportingPeriod
from loan_reports.sinks.serialization import to_dict
from loan_reports.sources.rows import (
    application_from_row,
    correction_from_row,
    schedule_from_row,
    service_fee_from_row,
    statement_from_row,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_rows(path: Path, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    """Parse every row of a JSON array file. A missing file has no rows."""
    if not path.exists():
        return []
    try:
        with open(path, encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SourceError(f"Cannot read {path}: {e}") from e

    if not isinstance(rows, list):
        raise SourceError(f"{path} must contain a JSON array")

    items = [parse(row) for row in rows]
    logger.debug("Loaded %d rows from %s", len(items), path)
    return items


class JsonOriginationSource:
    """Origination API rows exported to a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def list_records(self, period_filter: PeriodFilter) -> list[LoanApplication]:
        return [r for r in load_rows(self.path, application_from_row) if period_filter.matches(r)]


class JsonLedgerSource:
    """Ledger tables exported as ``statements.json``, ``service_fees.json``
    and ``schedules.json`` in one directory.
    """

    def __init__(self, directory: str | Path) -> None:
        """Initialize JSON ledger source.

        Parameters
        ----------
        directory : str | Path
            Directory holding the exports. Missing files are empty tables.
        """
        self.directory = Path(directory)

    def list_statements(self, period: ReportingPeriod) -> list[Statement]:
        rows = load_rows(self.directory / "statements.json", statement_from_row)
        return [s for s in rows if period.contains(s.payment_date)]

    def list_service_fees(self, period: ReportingPeriod) -> list[ServiceFee]:
        rows = load_rows(self.directory / "service_fees.json", service_fee_from_row)
        return [f for f in rows if period.contains(f.payment_date)]

    def list_schedules(self, period: ReportingPeriod) -> list[LoanSchedule]:
        rows = load_rows(self.directory / "schedules.json", schedule_from_row)
        return [s for s in rows if period.contains(s.due_date)]


class JsonCorrectionStore:
    """Read and write the correction log as a JSON array of table rows."""

    def __init__(self, path: str | Path) -> None:
        """Initialize JSON correction store.

        Parameters
        ----------
        path : str | Path
            JSON file. A missing file is an empty log.
        """
        self.path = Path(path)

    def list_corrections(self) -> list[Correction]:
        return load_rows(self.path, correction_from_row)

    def save(self, corrections: list[Correction]) -> None:
        """Overwrite the file with ``corrections`` in table-row form."""
        rows = [_to_row(c) for c in corrections]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2, ensure_ascii=False)


def _to_row(correction: Correction) -> dict:
    data = to_dict(correction)
    return {
        "id": data["correction_id"],
        "date": data["effective_date"],
        "related_ap_code": data["target_code"],
        "related_ln_code": data["loan_code"],
        "amount": data["signed_amount"],
        "type": data["kind"],
        "reason": data["reason"],
        "reference_month": data["reference_month"],
        "approve_term": data["approved_term_months"],
        "commission": data["commission_amount"],
        "country": data["country_id"],
        "country__name": data["country_name"],
        "country__en": data["country_en"],
        "legal_type__code": data["legal_document_type_code"],
        "legal_type__name": data["legal_document_type_name"],
        "province": data["province"],
        "product__type__en": data["product_type_name"],
        "source__name": data["source_channel_name"],
        "fullname": data["customer_name"],
    }
