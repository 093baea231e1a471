# ftslab

Small, self-contained tools for getting to know SQLite's FTS5 full-text
search extension and the BM25 relevance ranking it provides. Everything runs
on the `sqlite3` module that ships with Python, provided the underlying SQLite
library was built with FTS5 (most current builds are).

The package has three parts:

- `ftslab.setup`: checks that the local SQLite supports FTS5, that sample
  documents can be indexed, and that BM25 scoring behaves as expected.
- `ftslab.foundation`: a document store on top of an FTS5 virtual table,
  with insert, batch insert, search, field and category search, listing,
  update and delete.
- `ftslab.bm25`: configuration loading and validation for BM25 experiments
  (corpus size, search limits, display precision, histogram settings,
  percentiles).

## Installation

```console
pip install .
```

To run the test suite:

```console
pip install ".[test]"
pytest
```

## Checking your environment

`setup-validation` runs its checks against an in-memory database. The checks
live under the `validation` command group:

```console
setup-validation --help
setup-validation validation validate
setup-validation validation connect
setup-validation validation fts5
setup-validation validation testdata
setup-validation validation bm25
```

`validate` runs every check in turn, prints a pass/fail line for each, and
ends with a summary (total, passed, failed, success rate, duration). Add
`--verbose` (`-v`) for extra detail such as the SQLite version, the time each
check took and the first BM25 score. Any failing check makes the command exit
with status 1, and the error is written to standard error. Running
`setup-validation` with no command prints a short welcome text.

Note that SQLite's `bm25()` returns negative numbers: the lower the score,
the better the match.

## Working with documents

`fts5-foundation` manages a `documents` FTS5 table with `title`, `content`
and `category` columns (unicode61 tokenizer, diacritics removed). The
database defaults to `:memory:`, which is empty on every run, so pass
`--database` (`-d`) with a file path to keep documents between runs:

```console
fts5-foundation --database docs.db document create-table
fts5-foundation --database docs.db document batch-insert
fts5-foundation --database docs.db document insert --title "My Document" --content "Document content here" --category "example"
fts5-foundation --database docs.db document search "sqlite" --scores
fts5-foundation --database docs.db document search-category "indexes" "database" --limit 3
fts5-foundation --database docs.db document search-field "Introduction" "title"
fts5-foundation --database docs.db document list
fts5-foundation --database docs.db document update 1 --title "New Title"
fts5-foundation --database docs.db document delete 1
```

Searches return at most 10 results unless `--limit` says otherwise; `list`
shows up to 50 documents with a 100-character preview of each. Valid fields
for `search-field` are `title`, `content` and `category`. `batch-insert`
adds four example documents in a single transaction. `update` changes only
the fields you pass. File databases are opened in WAL journal mode.

Settings (`database`, `verbose`, `format`) can also come from a YAML file
given with `--config` (a `.json` file is read as JSON), or from
`.fts5-foundation.yaml`, `.fts5-foundation.yml` or `.fts5-foundation` in your
home directory or the current directory. The environment variables
`DATABASE`, `VERBOSE` and `FORMAT` override the file; command-line options
override both.

## Using the library

```python
from ftslab.setup.database import Database

with Database(":memory:") as db:
    db.create_test_table("docs")
    db.insert_test_data("docs")
    print(db.count_documents("docs"))
    for row in db.query_with_bm25("docs", "SQLite"):
        print(row)
```

```python
from ftslab.foundation.database import Database
from ftslab.foundation.handlers import DocumentService, format_search_results
from ftslab.foundation.models import Document

with Database("docs.db") as db:
    service = DocumentService(db, False, None)
    service.create_documents_table()
    service.batch_insert_documents([
        Document("SQLite FTS5", "Full-text search inside SQLite.", "database"),
    ])
    results = service.search_documents("sqlite", 10)
    print(format_search_results(results, True))
```

```python
from ftslab.bm25.config import load_config

config = load_config(None, {"search.max_results": 5}, {})
print(config.search.max_results)
print(config.resolved_database_path())
```

`load_config` reads `.bm25-fundamentals` YAML settings from the home or
current directory (or the file you name), lays environment variables such as
`CORPUS.SIZE` and then the overrides over them, and validates the result.

Errors are raised as exceptions: the setup tools use `SetupError` and its
subclasses (`ValidationError`, `DatabaseError`, `FTS5Error`,
`DatabaseConnectionError`) from `ftslab.setup.errors`, the document store uses
`FoundationError` and its subclasses (`NotFoundError`, `ValidationError`,
`DatabaseError`, `FTS5Error`, `TransactionError`) from
`ftslab.foundation.errors`, and configuration problems raise
`ftslab.bm25.config.ConfigError`. The helpers in `ftslab.setup.utilities`
raise `sqlite3.OperationalError`.

## What the package does not do

- `ftslab.bm25` holds configuration only. There is no command for generating
  a corpus, running BM25 searches with column weights, computing score
  statistics or drawing histograms.
- The `--format` option of both commands is accepted and stored, but all
  output is plain text.