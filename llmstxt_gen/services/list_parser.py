"""Helpers for free-text list answers (one item per line or comma separated)."""

import re

NONE_VALUES = frozenset({"none", "n/a", "na"})

_SEPARATORS = re.compile(r"[\r\n,]+")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def is_none_value(value: str) -> bool:
    """True for placeholder answers such as "None" or "N/A"."""
    return value.strip().lower() in NONE_VALUES


def split_list(value: str | None) -> list[str]:
    """Split a delimited answer into cleaned items.

    Items are trimmed; blanks and "none"-style placeholders are dropped;
    repeats are removed keeping the first occurrence, so callers that take
    the first N items see the order the user typed.
    """
    if not value or not value.strip():
        return []

    items: list[str] = []
    seen: set[str] = set()
    for raw in _SEPARATORS.split(value):
        item = raw.strip()
        if not item or is_none_value(item) or item in seen:
            continue
        seen.add(item)
        items.append(item)
    return items


def question_key(value: str) -> str:
    """Comparison key for questions: lowercase alphanumerics only."""
    return _NON_ALNUM.sub("", value.lower())


def normalize_whitespace(value: str | None) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return re.sub(r"\s+", " ", value or "").strip()
