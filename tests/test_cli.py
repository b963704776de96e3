"""Tests for CLI commands."""

import pytest

from spendlens.cli.main import cli
from spendlens.database.factories import create_sqlite_store


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cli.db")


@pytest.fixture
def seeded_db(db_path, sample_records):
    store = create_sqlite_store(db_path)
    store.put_many(sample_records)
    store.disconnect()
    return db_path


def _run(cli_runner, db_path, *args):
    return cli_runner.invoke(cli, ["--db-path", db_path, *args])


def test_help_lists_commands(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for name in ("import", "view", "summary", "compare", "trend", "sync", "transaction"):
        assert name in result.output


def test_unknown_timezone(cli_runner, db_path):
    result = cli_runner.invoke(cli, ["--db-path", db_path, "--timezone", "Mars/Base", "view"])

    assert result.exit_code == 1
    assert "Unknown time zone" in result.output


def test_view_empty(cli_runner, db_path):
    result = _run(cli_runner, db_path, "view")

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_view_filters(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "view", "--account", "Amex", "--min-amount", "100")

    assert result.exit_code == 0
    assert "Found 1 transaction(s):" in result.output
    assert "EasyJet" in result.output
    assert "Nando's" not in result.output


def test_view_verbose(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "view", "-v", "--search", "salary")

    assert result.exit_code == 0
    assert "Transaction ID: t3" in result.output
    assert "Amount: £2,000.00" in result.output


def test_view_range_conflicts_with_dates(cli_runner, seeded_db):
    result = _run(
        cli_runner, seeded_db, "view", "--range", "last-7-days", "--start-date", "2024-01-01"
    )

    assert result.exit_code == 1
    assert "cannot be combined" in result.output


def test_summary_single_month(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "summary", "--month", "2024-01")

    assert result.exit_code == 0
    assert "£2,000.00" in result.output
    assert "£80.00" in result.output
    assert "£1,920.00" in result.output
    assert result.output.index("Groceries") < result.output.index("Dining")


def test_summary_bad_month(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "summary", "--month", "Jan 2024")

    assert result.exit_code == 1
    assert "expected YYYY-MM" in result.output


def test_categories(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "categories", "--start-date", "2024-02-01")

    assert result.exit_code == 0
    assert result.output.index("Travel") < result.output.index("Groceries")
    assert "£190.00" in result.output
    assert "Dining" not in result.output


def test_compare_explicit_months(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "compare", "2024-01", "2024-02")

    assert result.exit_code == 0
    assert "2024-01 vs 2024-02" in result.output
    travel_line = next(line for line in result.output.splitlines() if line.startswith("Travel"))
    assert "£120.00" in travel_line
    assert "new" in travel_line
    assert "+137.50%" in result.output


def test_compare_defaults_to_latest_months_with_spending(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "compare")

    assert result.exit_code == 0
    assert "2024-01 vs 2024-02" in result.output


def test_db_path_from_environment(cli_runner, tmp_path):
    db_file = tmp_path / "env.db"
    result = cli_runner.invoke(
        cli, ["sync", "--seed", "9"], env={"SPENDLENS_DB_PATH": str(db_file)}
    )

    assert result.exit_code == 0
    assert db_file.exists()
    store = create_sqlite_store(str(db_file))
    assert len(store.get_all()) == 50
    store.disconnect()


def test_compare_needs_both_months(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "compare", "2024-01")

    assert result.exit_code == 1


def test_trend_window(cli_runner, seeded_db):
    result = _run(
        cli_runner, seeded_db, "trend", "--start-date", "2024-01-01", "--end-date", "2024-01-07"
    )

    assert result.exit_code == 0
    day_lines = [line for line in result.output.splitlines() if line.startswith("2024-01-0")]
    assert len(day_lines) == 7
    assert "£50.00" in day_lines[2]
    assert "£0.00" in day_lines[0]


def test_trend_inverted_window(cli_runner, seeded_db):
    result = _run(
        cli_runner, seeded_db, "trend", "--start-date", "2024-01-07", "--end-date", "2024-01-01"
    )

    assert result.exit_code == 1


def test_export_to_stdout(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "export", "--category", "Groceries")

    assert result.exit_code == 0
    assert "date,description,merchant,amount,category,account" in result.output
    assert "2024-02-02,Transaction,Tesco,-70.00,Groceries,Starling" in result.output


def test_export_to_file(cli_runner, seeded_db, tmp_path):
    out = tmp_path / "out.csv"
    result = _run(cli_runner, seeded_db, "export", "-o", str(out))

    assert result.exit_code == 0
    assert out.read_bytes().count(b"\r\n") == 6


def test_transaction_edits(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "transaction", "set-category", "t1", "Household")
    assert result.exit_code == 0
    assert "Household" in result.output

    result = _run(cli_runner, seeded_db, "transaction", "set-date", "t1", "2024-03-02")
    assert result.exit_code == 0
    assert "(2024-03)" in result.output

    result = _run(cli_runner, seeded_db, "transaction", "delete", "t1")
    assert result.exit_code == 0

    result = _run(cli_runner, seeded_db, "transaction", "delete", "t1")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_transaction_clear(cli_runner, seeded_db):
    result = _run(cli_runner, seeded_db, "transaction", "clear", "--yes")

    assert result.exit_code == 0
    assert "Deleted 5 transaction(s)" in result.output


def test_sync_and_accounts(cli_runner, db_path):
    result = _run(cli_runner, db_path, "sync", "--seed", "4", "--provider", "amex")
    assert result.exit_code == 0
    assert "Providers: amex" in result.output

    result = _run(cli_runner, db_path, "view", "--account", "Starling")
    assert "No transactions found." in result.output

    result = _run(cli_runner, db_path, "accounts")
    assert result.exit_code == 0
    assert "American Express Gold" in result.output
    assert "Total debt:" in result.output
    assert "£678.21" in result.output


def test_sync_unknown_provider(cli_runner, db_path):
    result = _run(cli_runner, db_path, "sync", "--provider", "monzo")

    assert result.exit_code == 1
    assert "Unknown provider" in result.output
