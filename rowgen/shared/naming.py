"""Naming utilities for code generation."""

from __future__ import annotations

import re
from functools import lru_cache

from .errors import InvalidIdentifierError

RUST_KEYWORDS: frozenset[str] = frozenset({
    "as",
    "async",
    "await",
    "break",
    "const",
    "continue",
    "crate",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "match",
    "mod",
    "move",
    "mut",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "type",
    "union",
    "unsafe",
    "use",
    "where",
    "while",
})

# Keywords that cannot be written as raw identifiers either
_RESERVED_RAW: frozenset[str] = frozenset({"crate", "self", "Self", "super"})

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a snake_case identifier to PascalCase.

    Each underscore-delimited segment is capitalised and the segments are
    concatenated. Uses caching for repeated calls with the same input.

    Examples:
        >>> to_pascal_case("user_accounts")
        'UserAccounts'
        >>> to_pascal_case("order_items")
        'OrderItems'
    """
    parts = [part for part in value.split("_") if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def row_struct_name(table_name: str) -> str:
    """Name of the full-row struct for a table."""
    return f"{to_pascal_case(table_name)}Row"


def input_struct_name(table_name: str) -> str:
    """Name of the insertable-row struct for a table."""
    return f"{to_pascal_case(table_name)}InputRow"


@lru_cache(maxsize=1024)
def sanitize_field_name(value: str) -> str:
    """Sanitize a column name for use as a Rust field name.

    Rust keywords are turned into raw identifiers (``type`` -> ``r#type``).

    Raises:
        InvalidIdentifierError: If the name cannot be a Rust identifier.
    """
    if not _IDENTIFIER_RE.match(value) or value == "_" or value in _RESERVED_RAW:
        raise InvalidIdentifierError(value)
    if value in RUST_KEYWORDS:
        return f"r#{value}"
    return value


@lru_cache(maxsize=1024)
def sanitize_function_name(value: str) -> str:
    """Sanitize a table name for use inside a Rust function name."""
    if not _IDENTIFIER_RE.match(value):
        raise InvalidIdentifierError(value)
    return value.lower()


def quote_identifier(value: str) -> str:
    """Quote an SQL identifier for PostgreSQL, doubling embedded quotes."""
    return '"' + value.replace('"', '""') + '"'
