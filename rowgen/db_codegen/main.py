"""
DB Code Generator - Generates Rust/sqlx data-access code from a live schema.

For every table in the inspected schema this emits:
- a full-row struct mirroring every column
- an input-row struct without server-generated columns
- an async insert function returning the full row
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Final, Iterable, Mapping, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..shared import (
    DEFAULT_EXCLUDED_TABLES,
    CatalogRow,
    ColumnInfo,
    GeneratorConfig,
    SchemaError,
    TableSchema,
    UnsupportedTypeError,
    group_tables,
    input_struct_name,
    load_config,
    load_snapshot,
    quote_identifier,
    read_catalog,
    row_struct_name,
    sanitize_field_name,
    sanitize_function_name,
)
from ..shared.log import setup_logging

logger = logging.getLogger("rowgen.db_codegen")

# Type mappings from information_schema data types to Rust types
DEFAULT_RUST_TYPES: Final[dict[str, str]] = {
    "integer": "i32",
    "bigint": "i64",
    "real": "f32",
    "text": "String",
    "character varying": "String",
    "timestamp with time zone": "chrono::DateTime<chrono::Utc>",
    "boolean": "bool",
    "bytea": "Vec<u8>",
    "numeric": "bigdecimal::BigDecimal",
    # Enums and other user-defined types are not mapped yet
    "USER-DEFINED": "()",
}

# Server-generated columns left out of input rows and insert statements
EXCLUDED_COLUMNS: Final[frozenset[str]] = frozenset({"id", "created_at"})

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class Column:
    """Represents a database column with Rust type information."""

    name: str
    field_name: str
    field_type: str

    @property
    def insertable(self) -> bool:
        return self.name not in EXCLUDED_COLUMNS


class InsertStatement:
    """Builds a parameterized ``INSERT ... RETURNING *`` statement.

    Column names, value arguments and ``$n`` placeholders are appended
    together by :meth:`add` using one running counter, so the three lists
    always have the same length and the same order.
    """

    __slots__ = ("table_name", "_columns", "_arguments", "_placeholders")

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        self._columns: list[str] = []
        self._arguments: list[str] = []
        self._placeholders: list[str] = []

    def add(self, column_name: str, argument: str) -> None:
        self._columns.append(quote_identifier(column_name))
        self._arguments.append(argument)
        self._placeholders.append(f"${len(self._placeholders) + 1}")

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._columns)

    @property
    def arguments(self) -> tuple[str, ...]:
        return tuple(self._arguments)

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(self._placeholders)

    @property
    def sql(self) -> str:
        table = quote_identifier(self.table_name)
        if not self._columns:
            return f"INSERT INTO {table} DEFAULT VALUES RETURNING *"
        return (
            f"INSERT INTO {table} ({', '.join(self._columns)}) "
            f"VALUES ({', '.join(self._placeholders)}) RETURNING *"
        )

    def __len__(self) -> int:
        return len(self._columns)


@dataclass(frozen=True, slots=True)
class TableModule:
    """Everything needed to render the code for one table."""

    table_name: str
    struct_name: str
    input_struct_name: str
    function_name: str
    columns: tuple[Column, ...]
    insert: InsertStatement

    @property
    def input_columns(self) -> tuple[Column, ...]:
        return tuple(col for col in self.columns if col.insertable)


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        # Pre-compile templates
        self._prelude_template = self.template_env.get_template("prelude.rs.j2")
        self._table_template = self.template_env.get_template("table.rs.j2")

    @property
    def prelude_template(self):
        return self._prelude_template

    @property
    def table_template(self):
        return self._table_template


_RUST_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    "\"": "\\\"",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


@lru_cache(maxsize=256)
def _quote(value: str) -> str:
    """Quote a string as a Rust string literal. Cached for performance.

    Control characters without a short escape use the Rust \\u{..} form.
    """
    escaped = []
    for char in value:
        if char in _RUST_ESCAPES:
            escaped.append(_RUST_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            escaped.append(f"\\u{{{ord(char):x}}}")
        else:
            escaped.append(char)
    return "\"" + "".join(escaped) + "\""


def map_type(
    source_type: str,
    nullable: bool = False,
    overrides: Mapping[str, str] | None = None,
    *,
    table: str | None = None,
    column: str | None = None,
) -> str:
    """Map a native column type to a Rust type.

    Args:
        source_type: The ``data_type`` reported by the catalog.
        nullable: Wrap the result in ``Option<...>``.
        overrides: Extra mappings consulted before the built-in table.
        table: Table name, only used for error reporting.
        column: Column name, only used for error reporting.

    Raises:
        UnsupportedTypeError: If the type has no mapping.
    """
    mapped = None
    if overrides:
        mapped = overrides.get(source_type)
    if mapped is None:
        mapped = DEFAULT_RUST_TYPES.get(source_type)
    if not mapped or not mapped.strip():
        raise UnsupportedTypeError(source_type, table=table, column=column)
    return f"Option<{mapped}>" if nullable else mapped


def _build_column(
    table_name: str,
    column: ColumnInfo,
    overrides: Mapping[str, str] | None = None,
) -> Column:
    field_type = map_type(
        column.source_type,
        column.nullable,
        overrides,
        table=table_name,
        column=column.name,
    )
    return Column(
        name=column.name,
        field_name=sanitize_field_name(column.name),
        field_type=field_type,
    )


def build_insert(table_name: str, columns: Sequence[Column]) -> InsertStatement:
    """Build the insert statement for the insertable columns of a table."""
    statement = InsertStatement(table_name)
    for col in columns:
        if col.insertable:
            statement.add(col.name, f"row.{col.field_name}")
    return statement


def build_table_module(
    table: TableSchema,
    overrides: Mapping[str, str] | None = None,
) -> TableModule:
    """Resolve names, types and SQL for one table.

    Raises:
        UnsupportedTypeError: If any column type has no mapping.
        InvalidIdentifierError: If a name cannot be used in Rust.
    """
    columns = tuple(_build_column(table.name, col, overrides) for col in table.columns)
    return TableModule(
        table_name=table.name,
        struct_name=row_struct_name(table.name),
        input_struct_name=input_struct_name(table.name),
        function_name=f"insert_{sanitize_function_name(table.name)}",
        columns=columns,
        insert=build_insert(table.name, columns),
    )


def _render_table_module(module: TableModule, ctx: GeneratorContext) -> str:
    query_args = [module.struct_name, _quote(module.insert.sql), *module.insert.arguments]
    return ctx.table_template.render(module=module, query_args=query_args)


def generate(
    rows: Iterable[CatalogRow],
    exclude_tables: Iterable[str] = DEFAULT_EXCLUDED_TABLES,
    type_overrides: Mapping[str, str] | None = None,
    schema: str = "public",
    ctx: GeneratorContext | None = None,
) -> str:
    """Generate Rust code for every table in the catalog rows.

    All tables are resolved before anything is rendered, so a mapping
    failure anywhere aborts the run without producing any text.

    Args:
        rows: Catalog rows ordered by table name, then column position.
        exclude_tables: Table names to skip entirely.
        type_overrides: Extra type mappings.
        schema: Schema name, recorded in the generated header.
        ctx: Template context to reuse.

    Returns:
        The generated source text.
    """
    ctx = ctx or GeneratorContext()
    denylist = frozenset(exclude_tables)

    modules: list[TableModule] = []
    for table in group_tables(rows):
        if table.name in denylist:
            logger.info("Skipping excluded table '%s'", table.name)
            continue
        logger.debug("Building table '%s' (%d columns)", table.name, len(table.columns))
        modules.append(build_table_module(table, type_overrides))

    buffer = [ctx.prelude_template.render(schema=schema)]
    for module in modules:
        buffer.append(_render_table_module(module, ctx))

    logger.info("Generated code for %d table(s)", len(modules))
    return "".join(buffer)


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", output)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate Rust row types and insert functions from a database schema",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--database-url",
        default=None,
        help="Database connection string (defaults to $DATABASE_URL)",
    )
    source.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Read the catalog from a YAML snapshot instead of a live database",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (schema, exclude_tables, type_overrides)",
    )
    parser.add_argument(
        "--schema",
        default=None,
        help="Database schema to inspect (default: public)",
    )
    parser.add_argument(
        "--exclude-table",
        action="append",
        default=[],
        metavar="TABLE",
        help="Skip a table; may be given more than once",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write generated code to a file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config) if args.config else GeneratorConfig()
        schema = args.schema or config.schema
        exclude_tables = config.exclude_tables | frozenset(args.exclude_table)

        if args.snapshot is not None:
            rows = load_snapshot(args.snapshot)
        else:
            database_url = args.database_url or os.environ.get("DATABASE_URL")
            if not database_url:
                raise SystemExit(
                    "Error: no database given; set DATABASE_URL or pass "
                    "--database-url/--snapshot"
                )
            rows = read_catalog(database_url, schema)

        text = generate(
            rows,
            exclude_tables=exclude_tables,
            type_overrides=config.type_overrides,
            schema=schema,
        )
        _write_output(text, args.output)
    except (SchemaError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
