"""Generate typed Rust/sqlx row types and insert functions from a PostgreSQL schema."""

__version__ = "0.1.0"
