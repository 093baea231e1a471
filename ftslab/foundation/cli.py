"""Command line entry point of the FTS5 foundation tool."""

from __future__ import annotations

import argparse
import json
import os
import re
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

import yaml

from ftslab.foundation.database import Config, Database
from ftslab.foundation.errors import display_error
from ftslab.foundation.handlers import (
    DocumentService,
    format_document_list,
    format_search_results,
)
from ftslab.foundation.models import Document

_CONFIG_NAME = ".fts5-foundation"
_YAML_EXTS = ("yaml", "yml")
_ENV_KEYS = ("database", "verbose", "format")

_ROOT_DESCRIPTION = """\
A CLI tool for learning SQLite FTS5 fundamentals and BM25 scoring.

This educational tool demonstrates:
- FTS5 virtual table creation
- Basic document insertion and indexing
- Simple search queries with BM25 relevance scoring
- CRUD operations with automatic indexing

Phase 1 focuses on establishing the foundation concepts of FTS5."""

_WELCOME = """\
SQLite FTS5 Foundation Learning Tool
Use 'fts5-foundation --help' to see available commands

Key learning areas:
  • FTS5 virtual table creation and management
  • Document insertion with automatic indexing
  • Basic search operations with MATCH operator
  • BM25 scoring and relevance ranking
"""

_DOCUMENT_DESCRIPTION = """\
Commands for managing documents in the FTS5 table.

This includes creating the table, inserting documents, searching,
and performing CRUD operations on the document collection."""

_EXAMPLE_DOCUMENTS = (
    Document(
        title="Introduction to Go Programming",
        content="Go is a statically typed, compiled programming language designed at Google. "
                "It combines the efficiency of a compiled language with the ease of programming "
                "of an interpreted language.",
        category="programming",
    ),
    Document(
        title="SQLite FTS5 Full-Text Search",
        content="SQLite FTS5 is an SQLite virtual table module that provides full-text search "
                "functionality. It supports advanced features like BM25 ranking, custom "
                "tokenizers, and phrase queries.",
        category="database",
    ),
    Document(
        title="Understanding BM25 Scoring Algorithm",
        content="BM25 is a ranking function used by search engines to estimate the relevance of "
                "documents to a given search query. It considers term frequency, inverse "
                "document frequency, and document length.",
        category="algorithms",
    ),
    Document(
        title="Database Indexing Fundamentals",
        content="Database indexes are data structures that improve the speed of data retrieval "
                "operations. They work by creating shortcuts to the data, trading storage space "
                "for faster reads.",
        category="database",
    ),
)

_ROW_ID = re.compile(r"\s*([+-]?\d+)")
_TRUE = {"1", "t", "true"}


def _parse_file(path: Path) -> dict[str, Any] | None:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError):
        return None
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _find_config_file() -> Path | None:
    directories: list[Path] = []
    try:
        directories.append(Path.home())
    except (RuntimeError, KeyError):
        pass
    directories.append(Path("."))
    for directory in directories:
        candidates = [directory / f"{_CONFIG_NAME}.{ext}" for ext in _YAML_EXTS]
        candidates.append(directory / _CONFIG_NAME)
        for candidate in candidates:
            if candidate.is_file():
                return candidate
    return None


def load_settings(config_file: str | os.PathLike | None = None,
                  verbose: bool = False) -> dict[str, Any]:
    """Read settings from a config file and the environment; the environment wins.

    Without ``config_file``, ``.fts5-foundation`` (YAML) is looked for in the
    home directory and then the current directory. A file that cannot be read
    is ignored.
    """
    settings: dict[str, Any] = {}
    path = Path(config_file) if config_file else _find_config_file()
    if path is not None and path.is_file():
        data = _parse_file(path)
        if data is not None:
            settings.update({str(key).lower(): value for key, value in data.items()})
            if verbose:
                sys.stderr.write(f"Using config file: {path}\n")
    for key in _ENV_KEYS:
        name = key.upper()
        if name in os.environ:
            settings[key] = os.environ[name]
    return settings


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE
    return bool(value)


def _add_global_options(parser: argparse.ArgumentParser, with_defaults: bool) -> None:
    def default(value):
        return value if with_defaults else argparse.SUPPRESS

    parser.add_argument("--config", default=default(""),
                        help="config file (default is $HOME/.fts5-foundation.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", default=default(None),
                        help="verbose output")
    parser.add_argument("-d", "--database", default=default(None),
                        help="database path (default: in-memory)")
    parser.add_argument("-f", "--format", default=default(None),
                        help="output format (text, json)")


def _parse_row_id(text: str) -> int | None:
    match = _ROW_ID.match(text)
    return int(match.group(1)) if match else None


def _out(text: str = "") -> None:
    sys.stdout.write(text + "\n")


def _run_create_table(service: DocumentService, args: argparse.Namespace) -> int:
    service.create_documents_table()
    _out("✓ FTS5 documents table created successfully")
    return 0


def _run_insert(service: DocumentService, args: argparse.Namespace) -> int:
    if not args.title or not args.content or not args.category:
        _out("Error: title, content, and category are all required")
        _out("Usage:")
        _out('  --title "Document Title"')
        _out('  --content "Document content..."')
        _out('  --category "document-category"')
        return 1
    service.insert_document(args.title, args.content, args.category)
    _out("✓ Document inserted successfully")
    return 0


def _run_batch_insert(service: DocumentService, args: argparse.Namespace) -> int:
    documents = list(_EXAMPLE_DOCUMENTS)
    _out(f"Inserting {len(documents)} example documents...")
    service.batch_insert_documents(documents)
    _out(f"✓ Successfully inserted {len(documents)} documents")
    return 0


def _run_search(service: DocumentService, args: argparse.Namespace) -> int:
    results = service.search_documents(args.query, args.limit)
    if not results:
        _out(f"No documents found matching: {args.query}")
        return 0
    _out(f"Found {len(results)} document(s) matching: {args.query}")
    _out(format_search_results(results, args.scores))
    return 0


def _run_search_category(service: DocumentService, args: argparse.Namespace) -> int:
    results = service.search_by_category(args.query, args.category, args.limit)
    if not results:
        _out(f"No documents found matching '{args.query}' in category '{args.category}'")
        return 0
    _out(f"Found {len(results)} document(s) matching '{args.query}' "
         f"in category '{args.category}':")
    _out(format_search_results(results, args.scores))
    return 0


def _run_search_field(service: DocumentService, args: argparse.Namespace) -> int:
    results = service.search_by_field(args.query, args.field, args.limit)
    if not results:
        _out(f"No documents found matching '{args.query}' in field '{args.field}'")
        return 0
    _out(f"Found {len(results)} document(s) matching '{args.query}' in field '{args.field}':")
    _out(format_search_results(results, args.scores))
    return 0


def _run_list(service: DocumentService, args: argparse.Namespace) -> int:
    documents = service.list_documents(args.limit)
    if not documents:
        _out("No documents found in the database")
        return 0
    _out(format_document_list(documents))
    return 0


def _run_update(service: DocumentService, args: argparse.Namespace) -> int:
    row_id = _parse_row_id(args.rowid)
    if row_id is None:
        _out(f"Invalid row ID '{args.rowid}': must be a number")
        return 1
    service.update_document(row_id, args.title, args.content, args.category)
    _out(f"✓ Document {row_id} updated successfully")
    return 0


def _run_delete(service: DocumentService, args: argparse.Namespace) -> int:
    row_id = _parse_row_id(args.rowid)
    if row_id is None:
        _out(f"Invalid row ID '{args.rowid}': must be a number")
        return 1
    service.delete_document(row_id)
    _out(f"✓ Document {row_id} deleted successfully")
    return 0


def _add_search_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-l", "--limit", type=int, default=10,
                        help="Maximum number of results to return")
    parser.add_argument("-s", "--scores", action="store_true",
                        help="Show BM25 scores and ranking information")


def _add_field_options(parser: argparse.ArgumentParser, prefix: str) -> None:
    parser.add_argument("-t", "--title", default="", help=f"{prefix}title")
    parser.add_argument("-c", "--content", default="", help=f"{prefix}content")
    parser.add_argument("-g", "--category", default="", help=f"{prefix}category")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the document command group."""
    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, with_defaults=False)

    parser = argparse.ArgumentParser(
        prog="fts5-foundation",
        description=_ROOT_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_global_options(parser, with_defaults=True)
    groups = parser.add_subparsers(dest="group", metavar="COMMAND")

    document = groups.add_parser(
        "document",
        parents=[common],
        help="Document table operations",
        description=_DOCUMENT_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    document.set_defaults(group_help=document.format_help)
    commands = document.add_subparsers(dest="command", metavar="SUBCOMMAND")

    def add(name: str, help_text: str, run: Callable[..., int]) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, parents=[common], help=help_text, description=help_text)
        sub.set_defaults(run=run)
        return sub

    add("create-table", "Create the FTS5 virtual table for document storage", _run_create_table)

    insert = add("insert", "Insert a single document into the FTS5 table", _run_insert)
    _add_field_options(insert, "Document ")

    add("batch-insert", "Insert multiple example documents for learning", _run_batch_insert)

    search = add("search", "Search documents using FTS5 MATCH operator", _run_search)
    search.add_argument("query")
    _add_search_options(search)

    search_category = add("search-category", "Search documents within a specific category",
                          _run_search_category)
    search_category.add_argument("query")
    search_category.add_argument("category")
    _add_search_options(search_category)

    search_field = add("search-field",
                       "Search within a specific field (title, content, or category)",
                       _run_search_field)
    search_field.add_argument("query")
    search_field.add_argument("field")
    _add_search_options(search_field)

    listing = add("list", "List all documents in the FTS5 table", _run_list)
    listing.add_argument("-l", "--limit", type=int, default=50,
                         help="Maximum number of documents to list")

    update = add("update", "Update an existing document", _run_update)
    update.add_argument("rowid")
    _add_field_options(update, "New document ")

    delete = add("delete", "Delete a document from the FTS5 table", _run_delete)
    delete.add_argument("rowid")

    return parser


def _resolve_config(args: argparse.Namespace, settings: dict[str, Any]) -> Config:
    verbose = True if args.verbose else _as_bool(settings.get("verbose", False))
    database = args.database if args.database is not None else settings.get("database", "")
    fmt = args.format if args.format is not None else settings.get("format", "")
    return Config(database_path=str(database or ""), verbose=verbose, format=str(fmt or ""))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool and return the process exit status."""
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config, bool(args.verbose))
    config = _resolve_config(args, settings)

    try:
        database = Database(config.database_path)
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
        service = DocumentService(database, config.verbose, sys.stdout)
        try:
            return run(service, args)
        except Exception as err:
            display_error(err, config.verbose, sys.stdout)
            return 1


if __name__ == "__main__":
    sys.exit(main())