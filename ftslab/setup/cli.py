"""Command line entry point of the setup validation tool."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ftslab.setup.database import Config, Database
from ftslab.setup.errors import display_error
from ftslab.setup.handlers import ValidationHandler

_ROOT_DESCRIPTION = """\
A CLI tool for validating that the SQLite FTS5 learning environment
is properly configured and all utilities are working correctly.

This validation tool ensures:
- SQLite connection and FTS5 support
- Sample data generation and insertion
- BM25 scoring functionality
- Utility function accessibility

Phase 0 establishes a solid foundation for subsequent learning phases."""

_VALIDATE_DESCRIPTION = """\
Runs a comprehensive suite of validation checks for the learning environment.

This command tests:
- SQLite database connection
- FTS5 virtual table support
- Sample data generation and insertion
- BM25 scoring functionality
- Utility function accessibility

All checks must pass for the environment to be considered ready for FTS5 learning."""

_CHECKS = (
    ("validate", "Run all validation checks", _VALIDATE_DESCRIPTION,
     ValidationHandler.handle_validate_all),
    ("connect", "Test SQLite database connection",
     "Validates that we can establish a connection to SQLite and query basic information.",
     ValidationHandler.handle_connect),
    ("fts5", "Test FTS5 functionality",
     "Validates FTS5 virtual table creation and basic operations to ensure FTS5 support is available.",
     ValidationHandler.handle_fts5),
    ("testdata", "Test sample data generation",
     "Validates the utilities for generating and inserting test data into FTS5 tables.",
     ValidationHandler.handle_test_data),
    ("bm25", "Test BM25 scoring",
     "Validates BM25 scoring functionality and SQLite's negative scoring behavior "
     "for proper FTS5 integration.",
     ValidationHandler.handle_bm25),
)

_WELCOME = """\
SQLite FTS5 Setup Validation Tool
Use 'setup-validation --help' to see available commands

Quick start:
  setup-validation validate    # Run all validation checks
  setup-validation connect     # Test SQLite connection
  setup-validation fts5        # Test FTS5 functionality
  setup-validation bm25        # Test BM25 scoring
"""


def _add_global_options(parser: argparse.ArgumentParser, with_defaults: bool) -> None:
    def default(value):
        return value if with_defaults else argparse.SUPPRESS

    parser.add_argument("--config", default=default(""),
                        help="config file (default is $HOME/.setup-validation.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", default=default(False),
                        help="verbose output with detailed explanations")
    parser.add_argument("-f", "--format", default=default("text"),
                        help="output format (text, json)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the validation command group."""
    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, with_defaults=False)

    parser = argparse.ArgumentParser(
        prog="setup-validation",
        description=_ROOT_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_global_options(parser, with_defaults=True)
    groups = parser.add_subparsers(dest="group", metavar="COMMAND")

    validation = groups.add_parser(
        "validation",
        parents=[common],
        help="Validation commands",
        description="Commands for validating SQLite FTS5 setup and functionality",
    )
    validation.set_defaults(group_help=validation.format_help)
    checks = validation.add_subparsers(dest="check", metavar="CHECK")
    for name, short, long, run in _CHECKS:
        sub = checks.add_parser(
            name,
            parents=[common],
            help=short,
            description=long,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        sub.set_defaults(run=run)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool and return the process exit status."""
    args = build_parser().parse_args(argv)
    config = Config(verbose=args.verbose, format=args.format)

    try:
        database = Database(":memory:")
    except Exception as exc:
        sys.stderr.write(f"Database initialization error: initializing database: {exc}\n")
        return 1

    with database:
        if args.group is None:
            sys.stdout.write(_WELCOME)
            return 0
        run = getattr(args, "run", None)
        if run is None:
            sys.stdout.write(args.group_help())
            return 0
        handler = ValidationHandler(database, config, sys.stdout)
        try:
            run(handler)
        except Exception as err:
            display_error(err, config.verbose, sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())