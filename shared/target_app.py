"""Reachability helpers for the application under test."""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest
import requests

from shared.waiting import ConvergenceTimeoutError, poll_until


def is_target_reachable(url: str, timeout: float = 5) -> bool:
    """Return True when ``url`` answers with any non-5xx status."""
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException:
        return False
    return response.status_code < 500


def wait_for_target_reachable(url: str, timeout: float = 60, interval: float = 2) -> None:
    """
    Poll ``url`` until it is reachable.

    Raises:
        RuntimeError: If the target is still unreachable after ``timeout``.
    """
    try:
        poll_until(
            lambda: is_target_reachable(url),
            timeout=timeout,
            interval=interval,
            description=f"target {url} reachable",
        )
    except ConvergenceTimeoutError as exc:
        raise RuntimeError(
            f"Target application at {url} not reachable after {timeout}s "
            f"({exc.attempts} checks)"
        ) from exc


def reachable_target_url(
    base_url: str,
    *,
    require_env: str = "E2E_REQUIRE_TARGET",
    timeout: float = 60,
    suite_name: str = "e2e",
) -> Generator[str, None, None]:
    """
    Yield ``base_url`` once the target answers.

    When the target cannot be reached the suite is skipped, unless the
    ``require_env`` variable is set (as in CI), in which case the failure
    is raised.
    """
    try:
        wait_for_target_reachable(base_url, timeout=timeout)
    except RuntimeError as exc:
        if os.getenv(require_env):
            raise
        pytest.skip(f"{exc}; set {require_env}=1 to fail instead of skipping {suite_name} tests")
    yield base_url
