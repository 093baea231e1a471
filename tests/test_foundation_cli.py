import pytest

from ftslab.foundation.cli import build_parser, load_settings, main


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    for name in ("DATABASE", "VERBOSE", "FORMAT"):
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return home


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "docs.db")


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out


def test_load_settings_reads_explicit_file(tmp_path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("database: stored.db\nformat: json\n", encoding="utf-8")
    settings = load_settings(str(cfg), False)
    assert settings["database"] == "stored.db"
    assert settings["format"] == "json"


def test_load_settings_environment_overrides_file(tmp_path, monkeypatch):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("format: json\n", encoding="utf-8")
    monkeypatch.setenv("FORMAT", "csv")
    assert load_settings(str(cfg), False)["format"] == "csv"


def test_load_settings_finds_home_file(_isolated):
    (_isolated / ".fts5-foundation.yaml").write_text("database: home.db\n", encoding="utf-8")
    assert load_settings(None, False)["database"] == "home.db"


def test_load_settings_without_file_is_empty():
    assert load_settings(None, False) == {}


def test_load_settings_verbose_reports_file(tmp_path, capsys):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("format: text\n", encoding="utf-8")
    load_settings(str(cfg), True)
    assert f"Using config file: {cfg}" in capsys.readouterr().err


def test_parser_search_options():
    args = build_parser().parse_args(["document", "search", "sqlite", "-l", "5", "-s"])
    assert (args.query, args.limit, args.scores) == ("sqlite", 5, True)


def test_parser_defaults_for_list():
    args = build_parser().parse_args(["document", "list"])
    assert args.limit == 50
    assert args.database is None


def test_parser_global_option_after_subcommand():
    args = build_parser().parse_args(["document", "list", "-d", "x.db"])
    assert args.database == "x.db"


def test_parser_search_requires_query():
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["document", "search"])
    assert exc.value.code == 2


def test_root_prints_welcome(capsys):
    code, out = run(capsys)
    assert code == 0
    assert out.startswith("SQLite FTS5 Foundation Learning Tool")


def test_insert_list_and_search(capsys, db_path):
    assert run(capsys, "-d", db_path, "document", "create-table")[0] == 0
    code, out = run(capsys, "-d", db_path, "document", "insert",
                    "-t", "Alpha Notes", "-c", "sqlite search engine", "-g", "notes")
    assert code == 0
    assert "✓ Document inserted successfully" in out

    code, out = run(capsys, "-d", db_path, "document", "list")
    assert code == 0
    assert "Title: Alpha Notes" in out

    code, out = run(capsys, "-d", db_path, "document", "search", "sqlite", "-s")
    assert code == 0
    assert "Found 1 document(s) matching: sqlite" in out
    assert "BM25 Score:" in out


def test_search_without_match(capsys, db_path):
    run(capsys, "-d", db_path, "document", "create-table")
    code, out = run(capsys, "-d", db_path, "document", "search", "zebra")
    assert code == 0
    assert "No documents found matching: zebra" in out


def test_batch_insert_then_list(capsys, db_path):
    run(capsys, "-d", db_path, "document", "create-table")
    code, out = run(capsys, "-d", db_path, "document", "batch-insert")
    assert code == 0
    assert "✓ Successfully inserted 4 documents" in out
    _, out = run(capsys, "-d", db_path, "document", "list")
    assert "Found 4 document(s):" in out


def test_search_category(capsys, db_path):
    run(capsys, "-d", db_path, "document", "create-table")
    run(capsys, "-d", db_path, "document", "batch-insert")
    code, out = run(capsys, "-d", db_path, "document", "search-category", "indexes", "database")
    assert code == 0
    assert "Title: Database Indexing Fundamentals" in out


def test_search_field_rejects_unknown_field(capsys, db_path):
    run(capsys, "-d", db_path, "document", "create-table")
    code, out = run(capsys, "-d", db_path, "document", "search-field", "go", "author")
    assert code == 1
    assert "Validation Error" in out


def test_insert_requires_all_fields(capsys):
    code, out = run(capsys, "document", "insert", "-t", "Only title")
    assert code == 1
    assert "Error: title, content, and category are all required" in out


def test_update_changes_title(capsys, db_path):
    run(capsys, "-d", db_path, "document", "create-table")
    run(capsys, "-d", db_path, "document", "insert", "-t", "Old", "-c", "body", "-g", "misc")
    code, out = run(capsys, "-d", db_path, "document", "update", "1", "-t", "Renamed")
    assert code == 0
    assert "✓ Document 1 updated successfully" in out
    _, out = run(capsys, "-d", db_path, "document", "list")
    assert "Title: Renamed" in out
    assert "Title: Old" not in out


def test_update_rejects_non_numeric_row_id(capsys):
    code, out = run(capsys, "document", "update", "abc", "-t", "x")
    assert code == 1
    assert "Invalid row ID 'abc': must be a number" in out


def test_delete_missing_document(capsys, db_path):
    run(capsys, "-d", db_path, "document", "create-table")
    code, out = run(capsys, "-d", db_path, "document", "delete", "7")
    assert code == 1
    assert "Not Found:" in out


def test_delete_removes_document(capsys, db_path):
    run(capsys, "-d", db_path, "document", "create-table")
    run(capsys, "-d", db_path, "document", "insert", "-t", "Gone", "-c", "body", "-g", "misc")
    code, out = run(capsys, "-d", db_path, "document", "delete", "1")
    assert code == 0
    _, out = run(capsys, "-d", db_path, "document", "list")
    assert "No documents found in the database" in out


def test_database_path_from_config_file(capsys, tmp_path, db_path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text(f"database: {db_path}\n", encoding="utf-8")
    run(capsys, "--config", str(cfg), "document", "create-table")
    run(capsys, "--config", str(cfg), "document", "insert",
        "-t", "Configured", "-c", "text", "-g", "misc")
    _, out = run(capsys, "-d", db_path, "document", "list")
    assert "Title: Configured" in out