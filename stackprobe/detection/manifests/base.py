"""Matching helpers shared by every manifest parser.

Detection is evidence-existence: an entry fires when any one of its
markers is present. There is no scoring and no mutual exclusion, so a
project can match a meta-framework and its UI library at the same time.
"""

from collections.abc import Iterable, Mapping
from typing import Optional


def match_patterns(table: Mapping[str, Iterable[str]], present: set[str]) -> list[str]:
    """Return every token in `table` with at least one marker in `present`."""
    return [token for token, markers in table.items() if any(m in present for m in markers)]


def match_substrings(table: Mapping[str, Iterable[str]], haystack: Iterable[str]) -> list[str]:
    """Like `match_patterns`, but markers match as substrings of any item."""
    items = list(haystack)
    return [
        token
        for token, markers in table.items()
        if any(marker in item for marker in markers for item in items)
    ]


def first_present(table: Mapping[str, Iterable[str]], present: set[str]) -> Optional[str]:
    """Return the first token in table order whose markers are present."""
    for token, markers in table.items():
        if any(m in present for m in markers):
            return token
    return None


def apply_language_filler(
    stack: list[str],
    language: str,
    type_tools: frozenset[str] = frozenset(),
) -> list[str]:
    """Prepend `language` when nothing more specific than a type checker matched."""
    if not stack or all(token in type_tools for token in stack):
        return [language, *stack]
    return stack


def looks_binary(raw: str) -> bool:
    return "\x00" in raw


def clean_text(value: object) -> Optional[str]:
    """Return a stripped string, or None for non-strings and blanks."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


def detect_datastores(table: Mapping[str, Iterable[str]], present: set[str]) -> list[str]:
    """Map driver markers to datastore tokens, in table order."""
    return match_patterns(table, present)
