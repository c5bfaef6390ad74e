#!/usr/bin/env python3
"""Generate sample back-office data and run the loan reports over it.

Builds a year of synthetic applications, corrections and ledger rows, then
assembles the daily, monthly and date-range reports and exports them to:
- console (default): pretty-printed JSON on stdout
- json: one file per report under --output-dir
- kafka: one message per report on <topic-prefix>.<report-type>

With --data-dir the reports run over JSON exports of the upstream tables
(applications.json, corrections.json, statements.json, service_fees.json,
schedules.json) instead of generated data. Corrections can also be read from
a JSON file (--corrections-file) or from the PostgreSQL correction table
(--postgres-url).
"""

import argparse
import logging
import sys
import time
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_reports.config import LoanReportsConfig
from loan_reports.exceptions import LoanReportsError
from loan_reports.generators import (
    ApplicationGenerator,
    CorrectionGenerator,
    ScheduleGenerator,
    ServiceFeeGenerator,
    StatementGenerator,
)
from loan_reports.logging import setup_logging
from loan_reports.reports import DailyReportAssembler, DateRangeReportAssembler, MonthlyReportAssembler
from loan_reports.sinks import ConsoleSink, JsonFileSink, KafkaSink
from loan_reports.sources import (
    InMemoryCorrectionStore,
    InMemoryLedgerSource,
    InMemoryOriginationSource,
    JsonCorrectionStore,
    JsonLedgerSource,
    JsonOriginationSource,
)

logger = logging.getLogger(__name__)


def generate_sources(
    year: int,
    num_applications: int,
    num_corrections: int,
    seed: int,
) -> tuple[InMemoryOriginationSource, InMemoryCorrectionStore, InMemoryLedgerSource]:
    """Generate a year of sample data held in memory.

    Parameters
    ----------
    year : int
        Calendar year to generate.
    num_applications : int
        Number of loan applications.
    num_corrections : int
        Number of manual corrections.
    seed : int
        Random seed for reproducibility.

    Returns
    -------
    tuple
        Origination source, correction store and ledger source.
    """
    t0 = time.perf_counter()
    applications = list(ApplicationGenerator(seed=seed).generate_batch(num_applications, year))
    logger.info("Generated %d applications in %.1fs", len(applications), time.perf_counter() - t0)

    corrections = CorrectionGenerator(seed=seed).generate_batch(applications, num_corrections, year)
    logger.info("Generated %d corrections", len(corrections))

    year_end = date(year, 12, 31)
    ledger = InMemoryLedgerSource(
        statements=list(StatementGenerator(seed=seed).generate_for(applications, until=year_end)),
        service_fees=list(ServiceFeeGenerator(seed=seed).generate_for(applications)),
        schedules=list(ScheduleGenerator(seed=seed).generate_for(applications, as_of=year_end)),
    )
    logger.info(
        "Generated %d statements, %d service fees, %d schedule lines",
        len(ledger.statements),
        len(ledger.service_fees),
        len(ledger.schedules),
    )

    return (
        InMemoryOriginationSource(records=applications),
        InMemoryCorrectionStore(corrections=corrections),
        ledger,
    )


def create_sink(kind: str, config: LoanReportsConfig, output_dir: Path | None):
    """Create the export sink selected on the command line."""
    if kind == "json":
        return JsonFileSink(output_dir or config.output.json_output_dir, pretty=config.output.pretty_json)
    if kind == "kafka":
        return KafkaSink(config.kafka)
    return ConsoleSink(pretty=True)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Run loan back-office reports over sample data")
    parser.add_argument(
        "--year",
        type=int,
        default=2025,
        help="Report year (default: 2025)",
    )
    parser.add_argument(
        "--day",
        type=date.fromisoformat,
        default=None,
        help="Day for the daily report, YYYY-MM-DD (default: June 15 of --year)",
    )
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=None,
        help="Date-range start, YYYY-MM-DD (default: first day of --year)",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=None,
        help="Date-range end, YYYY-MM-DD (default: last day of --year)",
    )
    parser.add_argument(
        "--applications",
        type=int,
        default=500,
        help="Number of applications to generate (default: 500)",
    )
    parser.add_argument(
        "--corrections",
        type=int,
        default=40,
        help="Number of corrections to generate (default: 40)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED env or 42)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Read applications, corrections and ledger rows from JSON exports in this directory",
    )
    parser.add_argument(
        "--corrections-file",
        type=Path,
        default=None,
        help="Read corrections from a JSON file instead of generating them",
    )
    parser.add_argument(
        "--postgres-url",
        type=str,
        default=None,
        help="Read corrections from the PostgreSQL correction table",
    )
    parser.add_argument(
        "--reports",
        nargs="+",
        choices=["daily", "monthly", "date_range"],
        default=["daily", "monthly", "date_range"],
        help="Reports to build (default: all)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to export the reports (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for --sink json (default: OUTPUT_DIR env or ./output)",
    )

    args = parser.parse_args()

    try:
        config = LoanReportsConfig.from_env()
    except LoanReportsError as e:
        parser.error(str(e))

    setup_logging(config.log_level, config.log_format)
    seed = args.seed if args.seed is not None else (config.seed if config.seed is not None else 42)

    logger.info("=" * 60)
    logger.info("Loan Reports - %d", args.year)
    logger.info("=" * 60)
    logger.info("Applications: %d", args.applications)
    logger.info("Seed: %d", seed)
    logger.info("Sink: %s", args.sink)
    logger.info("=" * 60)

    if args.data_dir:
        origination = JsonOriginationSource(args.data_dir / "applications.json")
        corrections = JsonCorrectionStore(args.data_dir / "corrections.json")
        ledger = JsonLedgerSource(args.data_dir)
    else:
        origination, corrections, ledger = generate_sources(args.year, args.applications, args.corrections, seed)
    if args.corrections_file:
        corrections = JsonCorrectionStore(args.corrections_file)
    elif args.postgres_url:
        from loan_reports.sources.postgres import PostgresCorrectionStore

        corrections = PostgresCorrectionStore(args.postgres_url, config.postgres.corrections_table)

    assemblers = (origination, corrections, ledger)
    reports = []
    t0 = time.perf_counter()
    if "daily" in args.reports:
        day = args.day or date(args.year, 6, 15)
        reports.append(DailyReportAssembler(*assemblers, config=config.reporting).build(day))
    if "monthly" in args.reports:
        try:
            reports.append(MonthlyReportAssembler(*assemblers, config=config.reporting).build(args.year))
        except LoanReportsError as e:
            parser.error(str(e))
    if "date_range" in args.reports:
        start = args.start or date(args.year, 1, 1)
        end = args.end or date(args.year, 12, 31)
        try:
            reports.append(DateRangeReportAssembler(*assemblers, config=config.reporting).build(start, end))
        except LoanReportsError as e:
            parser.error(str(e))
    logger.info("Built %d reports in %.2fs", len(reports), time.perf_counter() - t0)

    sink = create_sink(args.sink, config, args.output_dir)
    try:
        for report in reports:
            for warning in report.warnings:
                logger.warning("%s report: %s", report.report_type.value, warning)
            sink.write_report(report)
    finally:
        sink.close()


if __name__ == "__main__":
    main()
