"""Catalog reading and table grouping.

Reads column metadata from ``information_schema.columns`` with psycopg and
turns the ordered row stream into per-table schemas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import groupby
from typing import Any, Final, Iterable, Sequence

import psycopg

from .errors import DatabaseConnectionError, SchemaReadError

logger = logging.getLogger("rowgen.catalog")

COLUMNS_QUERY: Final[str] = (
    "SELECT table_name, column_name, data_type, is_nullable "
    "FROM information_schema.columns "
    "WHERE table_schema = %s "
    "ORDER BY table_name, ordinal_position"
)


@dataclass(frozen=True, slots=True)
class ColumnInfo:
    """A single column as described by the catalog."""

    name: str
    source_type: str
    nullable: bool


@dataclass(frozen=True, slots=True)
class CatalogRow:
    """One row of the catalog query: a column tagged with its table name."""

    table_name: str
    column_name: str
    data_type: str
    nullable: bool

    @property
    def column(self) -> ColumnInfo:
        return ColumnInfo(
            name=self.column_name,
            source_type=self.data_type,
            nullable=self.nullable,
        )

    @classmethod
    def from_record(cls, record: Sequence[Any]) -> CatalogRow:
        """Build a row from a raw ``(table, column, type, is_nullable)`` record.

        Raises:
            SchemaReadError: If the record has missing values.
        """
        if len(record) != 4 or any(value is None for value in record):
            raise SchemaReadError(f"Malformed catalog row: {tuple(record)!r}")
        table_name, column_name, data_type, is_nullable = record
        return cls(
            table_name=str(table_name),
            column_name=str(column_name),
            data_type=str(data_type),
            nullable=parse_nullable(is_nullable),
        )


@dataclass(frozen=True, slots=True)
class TableSchema:
    """A table and its columns in catalog order."""

    name: str
    columns: tuple[ColumnInfo, ...]


def parse_nullable(value: Any) -> bool:
    """Read an ``is_nullable`` value ('YES'/'NO', true/false or a bool)."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().upper()
    if text in ("YES", "TRUE"):
        return True
    if text in ("NO", "FALSE"):
        return False
    raise SchemaReadError(f"Unexpected is_nullable value: {value!r}")


def group_tables(rows: Iterable[CatalogRow]) -> list[TableSchema]:
    """Group an ordered row stream into tables.

    Each maximal run of consecutive rows sharing a table name becomes one
    ``TableSchema``, with columns kept in stream order.

    Precondition: ``rows`` must already be sorted by table name, then column
    position (the order ``COLUMNS_QUERY`` returns). Nothing is re-sorted here,
    so rows of one table that are not adjacent end up in separate groups.
    """
    return [
        TableSchema(name=table_name, columns=tuple(row.column for row in run))
        for table_name, run in groupby(rows, key=lambda row: row.table_name)
    ]


def read_catalog(conninfo: str, schema: str = "public") -> list[CatalogRow]:
    """Read column metadata for one schema from a live database.

    Args:
        conninfo: libpq connection string or URL.
        schema: Schema to inspect.

    Returns:
        Catalog rows ordered by table name, then ordinal position.

    Raises:
        DatabaseConnectionError: If the connection cannot be established.
        SchemaReadError: If the catalog query fails.
    """
    try:
        conn = psycopg.connect(conninfo)
    except psycopg.Error as e:
        raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e

    with conn:
        try:
            with conn.cursor() as cur:
                cur.execute(COLUMNS_QUERY, (schema,))
                records = cur.fetchall()
        except psycopg.Error as e:
            raise SchemaReadError(f"Catalog query failed: {e}", schema) from e

    rows = [CatalogRow.from_record(record) for record in records]
    logger.info("Read %d column(s) from schema '%s'", len(rows), schema)
    return rows
