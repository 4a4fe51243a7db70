#!/usr/bin/env python3
"""
End-to-end tests for the ledgerbuilder command.

Runs the CLI in a subprocess with piped input against temporary ledger
files, checking the bytes that end up on disk.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


def run_cli(*args, input_text=""):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    env["LEDGERBUILDER_ENV"] = "test"
    env["LEDGERBUILDER_HISTORY_FILE"] = ""
    env["PYTHONIOENCODING"] = "utf-8"
    return subprocess.run(
        [sys.executable, "-m", "ledgerbuilder.cli.main", *args],
        input=input_text.encode("utf-8"),
        capture_output=True,
        env=env,
        timeout=30,
    )


@pytest.mark.e2e
def test_monthly_entries_are_kept_in_date_order(ledger_path, sample_ledger_content):
    """Test several transactions entered out of order land in date order."""
    input_text = "\n".join(
        [
            "2020-01-15 Coffee",
            "a Expenses:Food €3.20",
            "f Assets:Cash",
            "2020-01-12 Split dinner",
            "s Expenses:Food Debts:Roomie €5.01",
            "f Assets:Checking",
            "",
        ]
    )
    result = run_cli(str(ledger_path), input_text=input_text)

    assert result.returncode == 0
    assert "Saved 2 transaction(s)" in result.stdout.decode("utf-8")

    content = ledger_path.read_text(encoding="utf-8")
    dates = [line.split()[0] for line in content.splitlines() if line[:1].isdigit()]
    assert dates == ["2020-01-10", "2020-01-12", "2020-01-15", "2020-01-20", "2020-01-20"]
    assert "    Debts:Roomie     €2.51\n    Assets:Checking  -€5.01\n" in content

    # Dropping the new blocks gives back the original file
    kept = content.replace(
        "2020-01-12 Split dinner\n"
        "    Expenses:Food    €2.50\n"
        "    Debts:Roomie     €2.51\n"
        "    Assets:Checking  -€5.01\n\n",
        "",
    ).replace("2020-01-15 Coffee\n    Expenses:Food  €3.20\n    Assets:Cash    -€3.20\n\n", "")
    assert kept == sample_ledger_content


@pytest.mark.e2e
def test_crlf_ledger_stays_crlf(temp_dir):
    """Test Windows line endings survive a save byte for byte."""
    path = temp_dir / "windows.ledger"
    original = "2020-01-10 Bakery\r\n\tExpenses:Food  €5.00\r\n\tAssets:Checking\r\n".encode("utf-8")
    path.write_bytes(original)

    result = run_cli(str(path), input_text="2020-02-01 Rent\na Expenses:Rent €700\nf Assets:Checking\n")

    assert result.returncode == 0
    data = path.read_bytes()
    assert data.startswith(original)
    assert data[len(original) :] == (
        "\r\n2020-02-01 Rent\r\n\tExpenses:Rent    €700.00\r\n\tAssets:Checking  -€700.00\r\n"
    ).encode("utf-8")


@pytest.mark.e2e
def test_missing_file_exits_with_error(temp_dir):
    """Test the command refuses a path that does not exist."""
    result = run_cli(str(temp_dir / "nope.ledger"))

    assert result.returncode != 0
    assert b"does not exist" in result.stderr
