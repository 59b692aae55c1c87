"""DB Code Generator - Generates Rust/sqlx data-access code from a live schema."""

from .main import (
    Column,
    InsertStatement,
    TableModule,
    GeneratorContext,
    build_insert,
    build_table_module,
    generate,
    map_type,
    DEFAULT_RUST_TYPES,
    EXCLUDED_COLUMNS,
)

__all__ = [
    "Column",
    "InsertStatement",
    "TableModule",
    "GeneratorContext",
    "build_insert",
    "build_table_module",
    "generate",
    "map_type",
    "DEFAULT_RUST_TYPES",
    "EXCLUDED_COLUMNS",
]
