"""
CSV helpers for validating exported reports downloaded during UI tests.

Exports are small, so content is handled as an in-memory string rather
than a file handle.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable


def parse_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into trimmed values.

    Quoted fields may contain commas, and a doubled quote inside a quoted
    field is an escaped quote.
    """
    values = next(csv.reader([line]), None) or [""]
    return [value.strip() for value in values]


def parse_csv_content(content: str) -> list[list[str]]:
    """Parse CSV text into rows, skipping blank lines."""
    lines = (line.strip() for line in content.splitlines())
    return [parse_csv_line(line) for line in lines if line]


def assert_csv_columns(content: str, expected_columns: Iterable[str]) -> None:
    """
    Assert that the CSV header row contains every expected column.

    Args:
        content: Raw CSV text.
        expected_columns: Column names that must appear in the header.

    Raises:
        ValueError: If the content is empty or columns are missing.
    """
    rows = parse_csv_content(content)
    if not rows:
        raise ValueError("CSV content is empty.")

    header = rows[0]
    missing = [column for column in expected_columns if column not in header]
    if missing:
        raise ValueError(f"Missing columns in CSV: {', '.join(missing)}")
