"""Custom exceptions for rowgen."""

from __future__ import annotations


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        full_message = f"{message}" if not source else f"[{source}] {message}"
        super().__init__(full_message)


class SchemaValidationError(SchemaError):
    """Raised when a snapshot or config file fails validation."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, source)


class InvalidIdentifierError(SchemaValidationError):
    """Raised when a catalog identifier cannot be used as a Rust name."""

    def __init__(self, identifier: str, source: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(
            f"'{identifier}' is not a valid Rust identifier",
            source,
        )


class DatabaseConnectionError(SchemaError):
    """Raised when the database cannot be reached or refuses the login."""


class SchemaReadError(SchemaError):
    """Raised when the catalog query fails or returns unusable rows."""


class UnsupportedTypeError(SchemaError):
    """Raised when a column's native type has no Rust mapping."""

    def __init__(
        self,
        type_name: str,
        table: str | None = None,
        column: str | None = None,
        source: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.table = table
        self.column = column
        if table and column:
            context = f" (column '{table}.{column}')"
        elif column:
            context = f" (column '{column}')"
        else:
            context = ""
        super().__init__(f"No type mapping for '{type_name}'{context}", source)
