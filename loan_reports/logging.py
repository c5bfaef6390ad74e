"""Log output for report runs: human-readable lines or one JSON object per line."""

import json
import logging
import sys
import threading
from datetime import datetime, timezone
from typing import Any, TextIO

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"

# Driver chatter that drowns out report progress at DEBUG
QUIET_LOGGERS = ("confluent_kafka", "psycopg", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Route all report logging to a single console handler.

    Parameters
    ----------
    level : str
        Level name for the ``loan_reports`` loggers. Unknown names fall
        back to INFO.
    format_type : str
        "standard" for aligned text lines, "json" for :class:`JsonFormatter`.
    stream : TextIO | None
        Destination, stdout by default. Reports printed by the console sink
        share stdout, so batch jobs usually pick "json" and a log file.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("loan_reports").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with report context merged in.

    Assemblers log with ``extra={"extra": {"report": ..., "period": ...}}``;
    those keys land at the top level of the object. Records emitted from
    the fetch worker threads also carry the thread name.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.threadName and record.threadName != threading.main_thread().name:
            log_data["thread"] = record.threadName

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        # Decimal amounts and dates in the report context
        return json.dumps(log_data, default=str, ensure_ascii=False)
