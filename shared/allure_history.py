"""Carry Allure trend history between runs."""

from __future__ import annotations

import shutil
from pathlib import Path

from shared.logger import get_logger

log = get_logger(__file__)


def copy_allure_history(
    project_root: Path,
    report_dir: str = "allure-report",
    results_dir: str = "allure-results",
) -> bool:
    """
    Copy ``<report_dir>/history`` into ``<results_dir>/history``.

    Allure only shows trend graphs when the previous report's history is
    present in the new results directory before the report is generated.

    Args:
        project_root: Directory holding the report and results folders.
        report_dir: Previous report directory name.
        results_dir: Results directory written by allure-pytest.

    Returns:
        True if history was copied, False if there was nothing to copy.
    """
    source = project_root / report_dir / "history"
    if not source.is_dir():
        log.debug("No previous Allure history at %s", source)
        return False

    target = project_root / results_dir / "history"
    target.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, target, dirs_exist_ok=True)
    log.info("Allure history copied from %s", source)
    return True
