"""Development server entry point."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from collections.abc import Sequence
from os import PathLike

from kakeboor.database import Database
from kakeboor.settings import get_settings
from kakeboor.views import create_app

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_DATABASE = "db.sqlite3"


def prepare_database(path: str | PathLike[str]) -> Database:
    """Open the database and create its tables, warning instead of failing."""
    try:
        database = Database(path)
    except sqlite3.Error as exc:
        print(f"Warning: Failed to initialize database: {exc}", file=sys.stderr)
        print("Continuing without database...", file=sys.stderr)
        return Database(":memory:")
    try:
        database.create_tables()
    except sqlite3.Error as exc:
        print(f"Warning: Failed to create tables: {exc}", file=sys.stderr)
    else:
        print("Database tables ready.")
    return database


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the development server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--database", default=DEFAULT_DATABASE)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Start the development server; return the process exit status."""
    args = _parser().parse_args(argv)
    try:
        get_settings()
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    with prepare_database(args.database) as database:
        app = create_app(database)
        print(f"Starting development server at http://{args.host}:{args.port}/")
        print("Quit the server with CONTROL-C.")
        try:
            app.run(host=args.host, port=args.port)
        except OSError as exc:
            print(f"Server error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())