"""
Shared pytest configuration for the whole test suite.

This module configures logging, carries Allure history forward when the
session starts and provides test data fixtures that do not need a browser.

Key Concepts Demonstrated:
- Session hooks (configure, sessionstart)
- Fixture scopes (function, session)
- Test data factories with Faker
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from faker import Faker

from config import BASE_DIR, get_config
from shared.allure_history import copy_allure_history
from shared.logger import configure_logging, get_logger

log = get_logger(__file__)

# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Session Hooks
# -----------------------------------------------------------------------------


def pytest_configure(config):
    """Configure logging before any test module is imported."""
    configure_logging()


def pytest_sessionstart(session):
    """
    Prepare the run: carry Allure history forward and log the configuration.

    Failures here are logged as warnings and never abort the session.
    """
    settings = get_config()
    if os.environ.get("PYTEST_XDIST_WORKER"):
        return

    try:
        copy_allure_history(
            Path(BASE_DIR),
            report_dir=settings.ALLURE_REPORT_DIR,
            results_dir=settings.ALLURE_RESULTS_DIR,
        )
    except OSError as exc:
        log.warning("Failed to copy Allure history: %s", exc)

    options = session.config.option
    log.info(
        "Test run configuration: workers=%s browsers=%s base_url=%s "
        "action_timeout=%dms ci=%s timezone=%s",
        getattr(options, "numprocesses", None) or 1,
        ",".join(getattr(options, "browser", None) or ["chromium"]),
        getattr(options, "base_url", None) or settings.BASE_URL,
        settings.ACTION_TIMEOUT_MS,
        settings.CI,
        settings.TIMEZONE,
    )


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def invalid_credentials() -> dict[str, str]:
    """
    Provide credentials that no real account uses.

    Returns:
        Dictionary with a random email and password.
    """
    return {
        "email": f"invalid.{fake.user_name()}@example.com",
        "password": fake.password(length=14),
    }


@pytest.fixture
def csv_factory(tmp_path):
    """
    Factory fixture for writing CSV files.

    Example:
        def test_something(csv_factory):
            path = csv_factory(["sku", "qty"], [["A1", "2"]])
    """

    def _create_csv(header: list[str], rows: list[list[str]], name: str = "data.csv") -> Path:
        lines = [",".join(header)] + [",".join(row) for row in rows]
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _create_csv
