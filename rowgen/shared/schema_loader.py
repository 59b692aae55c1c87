"""YAML loading for catalog snapshots and generator configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Iterable

import yaml

from .catalog import CatalogRow, group_tables, parse_nullable
from .errors import SchemaError, SchemaReadError, SchemaValidationError

DEFAULT_SCHEMA: Final[str] = "public"
DEFAULT_EXCLUDED_TABLES: Final[frozenset[str]] = frozenset({"_sqlx_migrations"})


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for one generation run."""

    schema: str = DEFAULT_SCHEMA
    exclude_tables: frozenset[str] = DEFAULT_EXCLUDED_TABLES
    type_overrides: dict[str, str] = field(default_factory=dict)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file whose root must be a mapping.

    Raises:
        SchemaError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Failed to read file: {e}", str(path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise SchemaError("YAML root must be a mapping", str(path))

    return data


def load_config(path: Path) -> GeneratorConfig:
    """Load a generator config file.

    Recognised keys are ``schema``, ``exclude_tables`` and ``type_overrides``.
    Tables listed in ``exclude_tables`` are added to the built-in denylist.
    """
    data = load_yaml(path)
    source = str(path)

    unknown = set(data) - {"schema", "exclude_tables", "type_overrides"}
    if unknown:
        raise SchemaValidationError(
            f"unknown config key(s): {', '.join(sorted(unknown))}", source
        )

    schema = data.get("schema", DEFAULT_SCHEMA)
    if not isinstance(schema, str) or not schema:
        raise SchemaValidationError("must be a non-empty string", source, field="schema")

    exclude = data.get("exclude_tables") or []
    if not isinstance(exclude, list) or not all(isinstance(t, str) for t in exclude):
        raise SchemaValidationError(
            "must be a list of table names", source, field="exclude_tables"
        )

    overrides = data.get("type_overrides") or {}
    if not isinstance(overrides, dict) or not all(
        isinstance(k, str) and isinstance(v, str) and v.strip()
        for k, v in overrides.items()
    ):
        raise SchemaValidationError(
            "must map type names to Rust types", source, field="type_overrides"
        )

    return GeneratorConfig(
        schema=schema,
        exclude_tables=DEFAULT_EXCLUDED_TABLES | frozenset(exclude),
        type_overrides=dict(overrides),
    )


def load_snapshot(path: Path) -> list[CatalogRow]:
    """Load a catalog snapshot written by ``rowgen dump``.

    The file holds ``tables: [{name, columns: [{name, type, nullable}]}]``.
    Tables and columns are flattened into catalog rows in file order, which
    callers treat exactly like the live query result.
    """
    data = load_yaml(path)
    source = str(path)
    tables = data.get("tables")

    if not isinstance(tables, list):
        raise SchemaValidationError("snapshot must provide a 'tables' list", source)

    rows: list[CatalogRow] = []
    for table in tables:
        if not isinstance(table, dict) or not table.get("name"):
            raise SchemaValidationError("table entry is missing 'name'", source)
        table_name = str(table["name"])
        columns = table.get("columns")
        if not isinstance(columns, list):
            raise SchemaValidationError(
                "must be a list", source, field=f"{table_name}.columns"
            )

        for column in columns:
            col_name = column.get("name") if isinstance(column, dict) else None
            if not col_name:
                raise SchemaValidationError(
                    "column is missing required 'name'", source, field=table_name
                )
            type_name = column.get("type")
            if not type_name:
                raise SchemaValidationError(
                    "column is missing required 'type'",
                    source,
                    field=f"{table_name}.{col_name}",
                )
            try:
                nullable = parse_nullable(column.get("nullable", False))
            except SchemaReadError as e:
                raise SchemaValidationError(
                    "nullable must be yes/no or true/false",
                    source,
                    field=f"{table_name}.{col_name}",
                ) from e
            rows.append(
                CatalogRow(
                    table_name=table_name,
                    column_name=str(col_name),
                    data_type=str(type_name),
                    nullable=nullable,
                )
            )

    return rows


def dump_snapshot(rows: Iterable[CatalogRow]) -> str:
    """Serialise catalog rows into the snapshot YAML format."""
    tables = [
        {
            "name": table.name,
            "columns": [
                {"name": col.name, "type": col.source_type, "nullable": col.nullable}
                for col in table.columns
            ],
        }
        for table in group_tables(rows)
    ]
    return yaml.safe_dump({"tables": tables}, sort_keys=False)
