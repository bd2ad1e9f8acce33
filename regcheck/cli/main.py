"""`regcheck` console script."""

from __future__ import annotations

import argparse
import json
import os
from typing import Sequence

from regcheck.checker import AvailabilityChecker, AvailabilityReason
from regcheck.cli.database import db_add, db_init, db_lookup, db_status
from regcheck.cli.run_server import MODES, run_server
from regcheck.config import build_config
from regcheck.database import SQLiteUserRepo, init_database
from regcheck.logging_utils import configure_logging


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="regcheck",
        description="Check whether an email address is already registered.",
    )
    ap.add_argument("--env-file", default=".env", help="Path to a .env file")
    ap.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    sub = ap.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--mode", choices=MODES, default="prod")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8080)

    check = sub.add_parser("check", help="Check one email and print the verdict")
    check.add_argument("email")

    db = sub.add_parser("db", help="Database management")
    db_sub = db.add_subparsers(dest="db_command", required=True)
    db_sub.add_parser("init", help="Create tables")
    db_sub.add_parser("status", help="Show schema version and user count")
    add = db_sub.add_parser("add", help="Seed a user")
    add.add_argument("email")
    add.add_argument("--name", default=None)
    lookup = db_sub.add_parser("lookup", help="Diagnose how an email matches stored rows")
    lookup.add_argument("email")

    return ap


def cmd_check(email: str, url: str) -> int:
    """Print the JSON verdict; exit 1 when availability could not be determined."""
    checker = AvailabilityChecker(SQLiteUserRepo(init_database(url=url)))
    result = checker.check_availability(email)
    print(json.dumps(result.to_dict(), indent=2))
    return 1 if result.reason is AvailabilityReason.ERROR else 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.database_url:
        os.environ["DATABASE_URL"] = args.database_url
    if args.env_file:
        os.environ.setdefault("REGCHECK_ENV_FILE", args.env_file)
    config = build_config(args.env_file)
    configure_logging(config.log_level)
    url = config.database_url

    if args.command == "serve":
        run_server(
            mode=args.mode,
            host=args.host,
            port=args.port,
            log_level=config.log_level,
        )
        return 0
    if args.command == "check":
        return cmd_check(args.email, url)

    if args.db_command == "init":
        return db_init(url)
    if args.db_command == "status":
        return db_status(url)
    if args.db_command == "add":
        return db_add(args.email, name=args.name, url=url)
    return db_lookup(args.email, url)


if __name__ == "__main__":
    raise SystemExit(main())
