"""Pre-payment preview: first half visible, the rest masked."""

import math
import re

from llmstxt_gen.models import PreviewSplit
from llmstxt_gen.services.errors import ContentRequiredError

MIN_LOCKED = 4

_NON_WHITESPACE = re.compile(r"\S")


def mask_line(line: str) -> str:
    """Replace every visible character with '#', keeping spacing."""
    return _NON_WHITESPACE.sub("#", line)


def split_preview(content: str | None) -> PreviewSplit:
    """Split content into a visible prefix and a masked remainder.

    About half the lines stay visible, but at least MIN_LOCKED lines are
    masked whenever the document is long enough, and at least one line is
    always visible. The locked part starts with a newline when both parts
    are non-empty so that ``visible + locked`` keeps the line structure.

    Raises:
        ContentRequiredError: if content is empty or whitespace only
    """
    if not content or not content.strip():
        raise ContentRequiredError()

    lines = content.split("\n")
    while lines and lines[-1] == "":
        lines.pop()

    total = len(lines)
    visible_count = math.ceil(total / 2)
    if total - visible_count < MIN_LOCKED:
        visible_count = max(1, total - MIN_LOCKED)

    visible = "\n".join(lines[:visible_count])
    masked = "\n".join(mask_line(line) for line in lines[visible_count:])
    locked = f"\n{masked}" if masked and visible else masked

    return PreviewSplit(visible=visible, locked=locked)
