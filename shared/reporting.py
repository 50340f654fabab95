"""
Allure report helpers.

Tests describe themselves with a :class:`TestMetadata` record so the
Allure report can group results by behaviour (epic / feature / story) and
by suite hierarchy (parent suite / suite / sub-suite), independent of the
Python module layout.

Reference: https://allurereport.org/docs/pytest/
"""

from __future__ import annotations

from dataclasses import dataclass, field

import allure

from shared.logger import get_logger

log = get_logger(__file__)


@dataclass
class TestMetadata:
    """Structured Allure metadata for one test. Unset fields are skipped."""

    __test__ = False  # not a pytest test class

    display_name: str | None = None
    owner: str | None = None
    tags: list[str] = field(default_factory=list)
    severity: str | None = None
    epic: str | None = None
    feature: str | None = None
    story: str | None = None
    parent_suite: str | None = None
    suite: str | None = None
    sub_suite: str | None = None


def apply_test_metadata(metadata: TestMetadata) -> None:
    """
    Apply the populated fields of ``metadata`` to the running test.

    Args:
        metadata: Metadata to apply.

    Raises:
        ValueError: If ``severity`` is not an Allure severity level.
    """
    if metadata.display_name:
        allure.dynamic.title(metadata.display_name)
    if metadata.owner:
        allure.dynamic.label("owner", metadata.owner)
    if metadata.tags:
        allure.dynamic.tag(*metadata.tags)
    if metadata.severity:
        allure.dynamic.severity(allure.severity_level(metadata.severity.lower()))
    if metadata.epic:
        allure.dynamic.epic(metadata.epic)
    if metadata.feature:
        allure.dynamic.feature(metadata.feature)
    if metadata.story:
        allure.dynamic.story(metadata.story)
    if metadata.parent_suite:
        allure.dynamic.parent_suite(metadata.parent_suite)
    if metadata.suite:
        allure.dynamic.suite(metadata.suite)
    if metadata.sub_suite:
        allure.dynamic.sub_suite(metadata.sub_suite)


def attach_screenshot(page, name: str = "Screenshot") -> bool:
    """
    Attach a full-page screenshot to the Allure report.

    Screenshot problems (closed page, crashed browser) are logged and do not
    fail the test.

    Returns:
        True if the screenshot was attached.
    """
    try:
        png = page.screenshot(full_page=True)
    except Exception as exc:
        log.error("Failed to attach screenshot: %s", exc)
        return False
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)
    return True


def attach_text(body: str, name: str) -> None:
    """Attach a plain-text artifact to the Allure report."""
    allure.attach(body, name=name, attachment_type=allure.attachment_type.TEXT)
