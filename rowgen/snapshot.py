#!/usr/bin/env python3
"""
Catalog snapshot tool.

Reads column metadata from a live database and writes it as a YAML snapshot
that ``rowgen generate --snapshot`` can consume without a database.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from rowgen.shared import (
    DEFAULT_SCHEMA,
    SchemaError,
    dump_snapshot,
    read_catalog,
)
from rowgen.shared.log import setup_logging

logger = logging.getLogger("rowgen.snapshot")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Write a YAML snapshot of a database schema's columns",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database connection string (defaults to $DATABASE_URL)",
    )
    parser.add_argument(
        "--schema",
        default=DEFAULT_SCHEMA,
        help="Database schema to inspect (default: public)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Snapshot file to write (default: stdout)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    database_url = args.database_url or os.environ.get("DATABASE_URL")
    if not database_url:
        raise SystemExit("Error: no database given; set DATABASE_URL or pass --database-url")

    try:
        rows = read_catalog(database_url, args.schema)
    except SchemaError as e:
        raise SystemExit(f"Error: {e}") from e

    text = dump_snapshot(rows)
    if args.output is None:
        sys.stdout.write(text)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
        logger.info("Wrote snapshot of %d column(s) to %s", len(rows), args.output)


if __name__ == "__main__":
    main()
