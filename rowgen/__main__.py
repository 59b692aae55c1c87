#!/usr/bin/env python3
"""
rowgen command line interface.

Usage:
    python -m rowgen <command> [options]

Commands:
    generate    Generate Rust row types and insert functions
    dump        Write a YAML snapshot of the database catalog

Examples:
    DATABASE_URL=postgres://localhost/app python -m rowgen generate -o src/db.rs
    python -m rowgen dump --schema public -o schema.yaml
    python -m rowgen generate --snapshot schema.yaml
"""

from __future__ import annotations

import sys


def cmd_generate(args: list[str]) -> int:
    """Generate code from the database schema."""
    from rowgen.db_codegen import main as db_codegen
    try:
        db_codegen.main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
            return 1
        return e.code if isinstance(e.code, int) else 0


def cmd_dump(args: list[str]) -> int:
    """Write a catalog snapshot."""
    from rowgen import snapshot
    try:
        snapshot.main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
            return 1
        return e.code if isinstance(e.code, int) else 0


COMMANDS = {
    "generate": (cmd_generate, "Generate Rust row types and insert functions"),
    "dump": (cmd_dump, "Write a YAML snapshot of the database catalog"),
}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = argv[0]
    args = argv[1:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
