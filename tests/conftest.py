"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

import ledgerbuilder.core.config as config_module

SAMPLE_LEDGER = """\
; Household ledger
account Assets:Savings
commodity CZK

2020-01-10 Bakery
    Expenses:Food        €5.00
    Assets:Checking     -€5.00

2020-01-20 Rent
    Expenses:Rent      €700.00
    Assets:Checking   -€700.00

2020-01-20 Market
    Expenses:Food       120 CZK  ; cash
    Assets:Cash
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_ledger_content() -> str:
    """Small ledger with two dates, two currencies and directives."""
    return SAMPLE_LEDGER


@pytest.fixture
def ledger_path(temp_dir) -> Path:
    """Sample ledger written to a temporary file."""
    path = temp_dir / "test.ledger"
    path.write_text(SAMPLE_LEDGER, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("LEDGERBUILDER_ENV", "test")
    monkeypatch.setenv("LEDGERBUILDER_HISTORY_FILE", "")
    monkeypatch.delenv("LEDGERBUILDER_MERGE_POSTINGS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    # Each test loads configuration from its own environment
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "ledger: Tests for ledger file indexing and writing")
    config.addinivalue_line("markers", "e2e: End-to-end tests running the installed CLI")
