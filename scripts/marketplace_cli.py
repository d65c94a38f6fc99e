#!/usr/bin/env python3
"""
Operator CLI for the marketplace ledger.

Commands:
    init-db          Create the schema (existing tables are left alone).
    seed             Drop, recreate and seed the reference data set.
    best-profession  Profession that earned the most in a window.
    best-clients     Clients that paid the most in a window.

Usage:
    python3 scripts/marketplace_cli.py init-db
    python3 scripts/marketplace_cli.py seed
    python3 scripts/marketplace_cli.py best-profession --start 2020-08-01 --end 2020-08-31
    python3 scripts/marketplace_cli.py best-clients --start 2020-08-01 --end 2020-08-31 --limit 3

Errors are printed as ``CODE: message`` on stderr with exit status 1.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from pathlib import Path

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from freelance_config import get_active_config  # noqa: E402
from freelance_config.bridges import build_orchestrator, init_store  # noqa: E402
from freelance_kernel.db.engine import create_tables, drop_tables, session_scope  # noqa: E402
from freelance_kernel.exceptions import MarketplaceError  # noqa: E402


def _parse_bound(value: str) -> date:
    """ISO date (whole day) or ISO timestamp."""
    try:
        if "T" in value or " " in value:
            return datetime.fromisoformat(value)
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date or timestamp: {value!r}") from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Marketplace ledger operator commands.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: freelance_config/sets/default.yaml).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create tables.")
    sub.add_parser("seed", help="Reset the database and load the reference data set.")

    for name, help_text in (
        ("best-profession", "Profession with the highest earnings."),
        ("best-clients", "Clients with the highest payments."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--start", required=True, type=_parse_bound)
        cmd.add_argument("--end", required=True, type=_parse_bound)
        if name == "best-clients":
            cmd.add_argument(
                "--limit",
                type=int,
                default=None,
                help="Rows to return (default: configured best_clients_default_limit).",
            )
    return parser


def _run(args: argparse.Namespace) -> None:
    config = get_active_config(args.config)
    init_store(config)

    if args.command == "init-db":
        create_tables()
        print("  Tables created.")
        return

    if args.command == "seed":
        from scripts.seed_data import seed

        drop_tables()
        create_tables()
        with session_scope() as session:
            counts = seed(session)
        print(
            f"  Seeded {counts['profiles']} profiles, {counts['contracts']} contracts, "
            f"{counts['jobs']} jobs."
        )
        return

    with session_scope() as session:
        orchestrator = build_orchestrator(session, config)
        if args.command == "best-profession":
            best = orchestrator.best_profession(args.start, args.end)
            print(f"  {best.profession}: {best.total}")
        else:
            for row in orchestrator.best_clients(args.start, args.end, args.limit):
                print(f"  {row.id:>4}  {row.full_name:<40} {row.paid}")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        _run(args)
    except MarketplaceError as exc:
        print(f"{exc.code}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
