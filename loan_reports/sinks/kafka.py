"""Kafka sink for publishing report aggregates to Kafka topics."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from loan_reports.config import KafkaConfig
from loan_reports.exceptions import SinkError
from loan_reports.models.report import ReportAggregate
from loan_reports.sinks.serialization import report_key, report_to_dict, to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Publish records and reports as JSON messages.

    Reports go to ``<topic_prefix>.<report_type>`` keyed by
    ``<report_type>:<period>`` so a recomputed report lands on the same
    partition as the previous version.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, topic: str, data: dict, key: str | None = None) -> None:
        """Send a single JSON payload to a topic."""
        value = json.dumps(data, ensure_ascii=False, default=str).encode("utf-8")
        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=value,
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as e:
            raise SinkError(f"Cannot produce to {topic}: {e}") from e
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to ``<topic_prefix>.<entity_type>``."""
        topic = f"{self.config.topic_prefix}.{entity_type}"
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, to_dict(record))

        self.flush()
        logger.info(
            "Batch complete: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )

    def write_report(self, report: ReportAggregate) -> None:
        """Publish one report aggregate."""
        topic = f"{self.config.topic_prefix}.{report.report_type.value}"
        self.send(topic, report_to_dict(report), key=report_key(report))
        self.flush()

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
