import json
import logging
from datetime import date

import pytest
from click.testing import CliRunner
from psycopg2.pool import PoolError

from crossword_store import main
from crossword_store.db import operations
from tests.conftest import guardian_document


@pytest.fixture()
def runner(monkeypatch, pool):
    monkeypatch.setattr(main, "setup_logging", lambda verbose=False: None)
    monkeypatch.setattr(main, "init_pool", lambda: pool)
    monkeypatch.setattr(main, "close_all_connections", lambda: None)
    return CliRunner()


def test_ids_command(runner, cursor):
    cursor.fetchall.return_value = [("guardian-1",), ("guardian-2",)]

    result = runner.invoke(main.cli, ["ids", "guardian"])

    assert result.exit_code == 0
    assert result.output.split() == ["guardian-1", "guardian-2"]


def test_list_command(runner, cursor):
    cursor.fetchall.return_value = [("guardian-1", "guardian", date(2024, 1, 1))]

    result = runner.invoke(main.cli, ["list", "guardian"])

    assert result.exit_code == 0
    assert "guardian-1  2024-01-01" in result.output


def test_show_command(runner, cursor):
    doc = guardian_document("guardian-1")
    cursor.fetchone.return_value = (doc,)

    result = runner.invoke(main.cli, ["show", "guardian", "guardian-1"])

    assert result.exit_code == 0
    assert json.loads(result.output) == doc


def test_show_missing_crossword(runner):
    result = runner.invoke(main.cli, ["show", "guardian", "missing-id"])
    assert result.exit_code == 1


def test_import_command(runner, cursor, monkeypatch, tmp_path):
    calls = []

    def fake_execute_values(cur, sql, rows, page_size):
        calls.append(rows)
        cur.rowcount = len(rows)

    monkeypatch.setattr(operations, "execute_values", fake_execute_values)
    source = tmp_path / "crosswords.json"
    source.write_text(json.dumps([
        {"id": "guardian-1", "series": "guardian", "date": "2024-01-01",
         "crossword_json": {"id": "guardian-1", "grid": [["A"]]}},
    ]))

    result = runner.invoke(main.cli, ["import", str(source)])

    assert result.exit_code == 0
    assert len(calls) == 1
    assert calls[0][0][0] == "guardian-1"


def test_import_rejects_bad_file(runner, tmp_path):
    source = tmp_path / "crosswords.json"
    source.write_text(json.dumps({"id": "guardian-1"}))

    result = runner.invoke(main.cli, ["import", str(source)])

    assert result.exit_code == 1


def test_check_db_failure(runner, pool):
    pool.getconn.side_effect = PoolError("connection pool exhausted")

    result = runner.invoke(main.cli, ["check-db"])

    assert result.exit_code == 1


def test_setup_logging_tags_logger_name():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        main.setup_logging(verbose=True)
        handler = [h for h in root.handlers if h not in before][0]
        record = logging.LogRecord(
            "crossword_store.db.operations", logging.INFO, __file__, 1,
            "Stored 1 crosswords", None, None
        )
        text = handler.formatter.format(record)

        assert "crossword_store.db.operations" in text
        assert "Stored 1 crosswords" in text
        assert root.level == logging.DEBUG
    finally:
        for h in [h for h in root.handlers if h not in before]:
            root.removeHandler(h)
        root.setLevel(level)
