"""Configuration management for loan-reports."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loan_reports.exceptions import ConfigurationError


@dataclass
class KafkaConfig:
    """Kafka producer configuration for publishing report aggregates."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "backoffice.reports"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration for the correction store."""

    host: str = "localhost"
    port: int = 5432
    database: str = "backoffice"
    user: str = "postgres"
    password: str = "postgres"
    corrections_table: str = "excluded_disbursements"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ReportingConfig:
    """Knobs shared by the report assemblers."""

    region_top_n: int = 10
    report_start_year: int = 2025
    fetch_workers: int = 4


@dataclass
class LoanReportsConfig:
    """Main configuration for loan-reports."""

    reporting: ReportingConfig = field(default_factory=ReportingConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LoanReportsConfig":
        """Create config from environment variables."""
        import os

        reporting = ReportingConfig(
            region_top_n=_int_env("REGION_TOP_N", "10"),
            report_start_year=_int_env("REPORT_START_YEAR", "2025"),
            fetch_workers=_int_env("FETCH_WORKERS", "4"),
        )
        if reporting.region_top_n < 0:
            raise ConfigurationError("REGION_TOP_N must not be negative")
        if reporting.fetch_workers < 1:
            raise ConfigurationError("FETCH_WORKERS must be at least 1")

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic_prefix=os.getenv("KAFKA_TOPIC_PREFIX", "backoffice.reports"),
        )

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_int_env("POSTGRES_PORT", "5432"),
            database=os.getenv("POSTGRES_DB", "backoffice"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            corrections_table=os.getenv("CORRECTIONS_TABLE", "excluded_disbursements"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            reporting=reporting,
            kafka=kafka,
            postgres=postgres,
            output=output,
            seed=_int_env("SEED", None) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: str | None) -> int:
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
