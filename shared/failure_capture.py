"""
Test failure artifact capture.

When a browser test fails, the screenshot alone rarely explains why.  This
module attaches four artifacts to the Allure report, each named with a
``failure_`` prefix, the capture time and the test title:

- full-page screenshot (PNG)
- page source (HTML)
- error message with stack trace and root cause (text)
- current URL (text)

It also provides :class:`ConsoleLogCollector`, which records browser
console messages so they can be saved alongside the other artifacts.

Key Concepts Demonstrated:
- Best-effort artifact collection that never masks the original failure
- ANSI stripping so Playwright's coloured assertion output stays readable
"""

from __future__ import annotations

import re
import traceback
from datetime import datetime
from pathlib import Path

import allure

from shared.logger import get_logger

log = get_logger(__file__)

ANSI_ESCAPE = re.compile(r"\x1B\[[0-9;]*m")
TITLE_SEPARATORS = re.compile(r"[\s–]")


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI colour escape sequences from ``text``."""
    return ANSI_ESCAPE.sub("", text)


def artifact_name(kind: str, test_title: str, extension: str, now: datetime | None = None) -> str:
    """
    Build a failure artifact file name.

    Example: ``failure_screenshot_14_03_59_06_30_2025_TC_001:_Login.png``.

    Args:
        kind: Artifact kind, e.g. ``screenshot`` or ``src_code``.
        test_title: Title of the failing test.
        extension: File extension without the dot.
        now: Timestamp to embed; defaults to the current local time.
    """
    now = now or datetime.now()
    time_part = now.strftime("%H_%M_%S")
    date_part = now.strftime("%m_%d_%Y")
    title = TITLE_SEPARATORS.sub("_", test_title)
    return f"failure_{kind}_{time_part}_{date_part}_{title}.{extension}"


def format_error_log(error: BaseException) -> str:
    """
    Render an exception as a clean report including stack trace and cause.

    Args:
        error: The failure to render.

    Returns:
        Plain-text error report without ANSI codes.
    """
    message = strip_ansi_codes(str(error))
    stack = strip_ansi_codes(
        "".join(traceback.format_exception(type(error), error, error.__traceback__))
    )
    report = f"Error: {message}\n\nStack Trace:\n{stack}"
    if error.__cause__ is not None:
        report += f"\n\nRoot cause:\n{strip_ansi_codes(repr(error.__cause__))}"
    return report


def capture_test_failure(page, test_title: str, error: BaseException) -> list[str]:
    """
    Attach failure artifacts for a failed test to the Allure report.

    Capture errors are logged, never raised, so the test's own failure
    remains the reported one.

    Args:
        page: Playwright page the test was driving.
        test_title: Title of the failing test.
        error: The failure (assertion, timeout, ...).

    Returns:
        Names of the artifacts that were attached.
    """
    now = datetime.now()
    attached: list[str] = []

    try:
        current_url = page.url
        log.error(
            "Capturing test failure artifacts: test=%s url=%s error=%s",
            test_title,
            current_url,
            strip_ansi_codes(str(error)),
        )

        name = artifact_name("screenshot", test_title, "png", now)
        allure.attach(
            page.screenshot(full_page=True),
            name=name,
            attachment_type=allure.attachment_type.PNG,
        )
        attached.append(name)

        name = artifact_name("src_code", test_title, "html", now)
        allure.attach(page.content(), name=name, attachment_type=allure.attachment_type.HTML)
        attached.append(name)

        name = artifact_name("error_msg", test_title, "txt", now)
        allure.attach(
            format_error_log(error), name=name, attachment_type=allure.attachment_type.TEXT
        )
        attached.append(name)

        name = artifact_name("current_url", test_title, "txt", now)
        allure.attach(current_url, name=name, attachment_type=allure.attachment_type.TEXT)
        attached.append(name)

        log.info("Test failure artifacts captured successfully: %s", test_title)
    except Exception as exc:  # pragma: no cover - best effort logging
        log.error("Failed to capture error artifacts for %s: %s", test_title, exc)

    return attached


class ConsoleLogCollector:
    """
    Collect browser console messages for a page.

    Usage::

        collector = ConsoleLogCollector()
        page.on("console", collector.record)
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def record(self, message) -> None:
        """Playwright ``console`` event handler."""
        self.lines.append(f"{message.type}: {message.text}")

    def text(self) -> str:
        return "\n".join(self.lines)

    def write(self, path: Path) -> Path:
        """Write collected lines to ``path`` and return it."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.text(), encoding="utf-8")
        return path
