"""Deterministic option picking for dropdowns and table rows."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


def _normalise(label: str) -> str:
    return " ".join(label.split()).lower()


def pick_preferred(
    options: Sequence[T],
    preferred: Iterable[str] = (),
    *,
    key: Callable[[T], str] = str,
) -> T:
    """
    Pick an option using a fixed tie-break policy.

    The first entry of ``preferred`` that matches an option label wins
    (case and whitespace insensitive).  When none match, the first option in
    document order is returned, so repeated runs against the same page
    always choose the same option.

    Args:
        options: Available options in the order the page renders them.
        preferred: Labels in order of preference.
        key: Maps an option to its label.

    Returns:
        The chosen option.

    Raises:
        LookupError: If ``options`` is empty.
    """
    if not options:
        raise LookupError("No options available to choose from")

    by_label: dict[str, T] = {}
    for option in options:
        by_label.setdefault(_normalise(key(option)), option)

    for wanted in preferred:
        match = by_label.get(_normalise(wanted))
        if match is not None:
            return match
    return options[0]


def first_matching(options: Iterable[T], predicate: Callable[[T], bool]) -> T:
    """
    Return the first option satisfying ``predicate``.

    Raises:
        LookupError: If no option matches.
    """
    for option in options:
        if predicate(option):
            return option
    raise LookupError("No option satisfied the selection criteria")
