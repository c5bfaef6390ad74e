"""Correction store backed by the back-office PostgreSQL database."""

import logging

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from loan_reports.config import PostgresConfig
from loan_reports.exceptions import SourceError
from loan_reports.models.correction import Correction
from loan_reports.sources.rows import correction_from_row

logger = logging.getLogger(__name__)


class PostgresCorrectionStore:
    """Read the correction log from a table.

    Rows come back oldest first (by effective date, then by entry time), which
    is the order the reconciliation engine applies them in.
    """

    def __init__(self, config: PostgresConfig | str, table: str = "excluded_disbursements") -> None:
        """Initialize PostgreSQL correction store.

        Parameters
        ----------
        config : PostgresConfig | str
            Connection configuration or a connection string.
        table : str
            Table name, ignored when ``config`` is a PostgresConfig.
        """
        if isinstance(config, PostgresConfig):
            self.connection_string = config.connection_string
            self.table = config.corrections_table
        else:
            self.connection_string = config
            self.table = table

    def list_corrections(self) -> list[Correction]:
        query = sql.SQL("SELECT * FROM {} ORDER BY date ASC, created_at ASC").format(
            sql.Identifier(self.table)
        )
        try:
            with psycopg.connect(self.connection_string, row_factory=dict_row) as conn:
                with conn.cursor() as cur:
                    cur.execute(query)
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise SourceError(f"Cannot read corrections from {self.table}: {e}") from e

        logger.debug("Fetched %d corrections from %s", len(rows), self.table)
        return [correction_from_row(row) for row in rows]
