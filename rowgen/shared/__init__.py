"""Shared utilities for rowgen."""

from .catalog import (
    COLUMNS_QUERY,
    CatalogRow,
    ColumnInfo,
    TableSchema,
    group_tables,
    read_catalog,
)
from .schema_loader import (
    DEFAULT_EXCLUDED_TABLES,
    DEFAULT_SCHEMA,
    GeneratorConfig,
    dump_snapshot,
    load_config,
    load_snapshot,
    load_yaml,
)
from .naming import (
    to_pascal_case,
    row_struct_name,
    input_struct_name,
    sanitize_field_name,
    sanitize_function_name,
    quote_identifier,
    RUST_KEYWORDS,
)
from .errors import (
    SchemaError,
    SchemaValidationError,
    InvalidIdentifierError,
    DatabaseConnectionError,
    SchemaReadError,
    UnsupportedTypeError,
)

__all__ = [
    # Catalog
    "COLUMNS_QUERY",
    "CatalogRow",
    "ColumnInfo",
    "TableSchema",
    "group_tables",
    "read_catalog",
    # Snapshot and config loading
    "DEFAULT_EXCLUDED_TABLES",
    "DEFAULT_SCHEMA",
    "GeneratorConfig",
    "dump_snapshot",
    "load_config",
    "load_snapshot",
    "load_yaml",
    # Naming utilities
    "to_pascal_case",
    "row_struct_name",
    "input_struct_name",
    "sanitize_field_name",
    "sanitize_function_name",
    "quote_identifier",
    "RUST_KEYWORDS",
    # Errors
    "SchemaError",
    "SchemaValidationError",
    "InvalidIdentifierError",
    "DatabaseConnectionError",
    "SchemaReadError",
    "UnsupportedTypeError",
]
