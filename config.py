"""
Test run configuration module.

This module defines configuration classes for the environments the
suite runs in (local workstation, CI).  Configuration values are loaded
from environment variables, with a project-level ``.env`` file read first,
and fall back to sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent

load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base configuration with default settings."""

    # Target applications
    BASE_URL: str = os.environ.get("BASE_URL") or "https://qa8.shipedge.com"
    XENVIO_URL: str = (
        os.environ.get("XENVIO_URL") or "https://x5demo2.shipedge.com/users/sign_in"
    )

    # Credentials (never committed; provide via .env or CI secrets)
    TEST_USER_EMAIL: str | None = os.environ.get("TEST_USER_EMAIL")
    TEST_USER_PASSWORD: str | None = os.environ.get("TEST_USER_PASSWORD")
    XENVIO_EMAIL: str | None = os.environ.get("XENVIO_EMAIL")
    XENVIO_PASSWORD: str | None = os.environ.get("XENVIO_PASSWORD")

    # Template app for the example login/dashboard suites; unset skips them
    EXAMPLE_BASE_URL: str | None = os.environ.get("EXAMPLE_BASE_URL")

    # Fallback credentials for the example login/dashboard pages
    EXAMPLE_USER_EMAIL: str = os.environ.get("TEST_USER_EMAIL", "test@example.com")
    EXAMPLE_USER_PASSWORD: str = os.environ.get("TEST_USER_PASSWORD", "password123")

    # Browser context
    TEST_ID_ATTRIBUTE: str = os.environ.get("TEST_ID_ATTRIBUTE", "data-testid")
    TIMEZONE: str = os.environ.get("TIMEZONE", "America/New_York")
    VIEWPORT: dict = {"width": 1280, "height": 720}
    PERMISSIONS: list = ["notifications"]

    # Timeouts in milliseconds, matching Playwright's units
    ACTION_TIMEOUT_MS: int = 60 * 1000
    NAVIGATION_TIMEOUT_MS: int = 60 * 1000
    EXPECT_TIMEOUT_MS: int = 60 * 1000

    # Slows each Playwright operation down; useful when watching a headed run
    SLOW_MO_MS: int = int(os.environ.get("SLOW_MO_MS", "100"))

    ALLURE_RESULTS_DIR: str = "allure-results"
    ALLURE_REPORT_DIR: str = "allure-report"
    SCREENSHOT_DIR: str = "test-results/screenshots"

    CI: bool = _env_flag("CI")


class LocalConfig(Config):
    """Developer workstation configuration."""

    CI: bool = False


class CIConfig(Config):
    """Continuous integration configuration."""

    CI: bool = True
    SLOW_MO_MS: int = int(os.environ.get("SLOW_MO_MS", "0"))


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "default": LocalConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (local, ci).
             If None, uses E2E_ENV, then "ci" when the CI variable is set.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("E2E_ENV") or ("ci" if _env_flag("CI") else "local")
    return config.get(env, config["default"])
