"""Quality checks and structural cleanup for generated llms.txt content.

Checks are advisory: they produce warnings for logs and API metadata but
never block delivery of the document.
"""

import logging
import re

logger = logging.getLogger(__name__)

MIN_SUMMARY_LENGTH = 30
MIN_PAGES_WITH_DESCRIPTIONS = 3
MIN_QUESTIONS = 2
MIN_DESCRIPTION_CHARS = 20

MARKETING_PHRASES = (
    "leading provider",
    "best-in-class",
    "world-class",
    "innovative solution",
    "comprehensive platform",
)

# Broader than the builder's list: generic "learn more about" copy does not
# count towards the meaningful-page minimum.
PLACEHOLDER_PHRASES = (
    "user-prioritized",
    "nice-to-have",
    "summary not available",
    "see site for details",
    "learn more about",
)

_SUMMARY_LINE = re.compile(r"^> (.+)$", re.MULTILINE)
_PAGE_LINE = re.compile(r"^- \[.+\]\(.+\): .+$", re.MULTILINE)
_QUESTION_BLOCK = re.compile(r"^Key questions this site answers:\n((?:- .+(?:\n|$))+)", re.MULTILINE)
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def _is_placeholder(description: str) -> bool:
    lowered = description.lower()
    return any(phrase in lowered for phrase in PLACEHOLDER_PHRASES)


def check_structure(content: str) -> list[str]:
    warnings = []
    if not content.startswith("# "):
        warnings.append("Missing H1 title")
    if "> " not in content:
        warnings.append("Missing summary blockquote")
    return warnings


def check_summary(content: str) -> list[str]:
    match = _SUMMARY_LINE.search(content)
    if not match:
        return []

    warnings = []
    summary = match.group(1).strip()
    if len(summary) < MIN_SUMMARY_LENGTH:
        warnings.append(
            f"Summary too short ({len(summary)} chars, need {MIN_SUMMARY_LENGTH}+)"
        )

    lowered = summary.lower()
    for phrase in MARKETING_PHRASES:
        if phrase in lowered:
            warnings.append(f"Summary contains marketing phrase: '{phrase}'")
    return warnings


def check_pages(content: str) -> list[str]:
    meaningful = 0
    for line in _PAGE_LINE.findall(content):
        description = line.split("): ", 1)[-1]
        if len(description) >= MIN_DESCRIPTION_CHARS and not _is_placeholder(description):
            meaningful += 1

    if meaningful < MIN_PAGES_WITH_DESCRIPTIONS:
        return [
            f"Only {meaningful} pages with meaningful descriptions "
            f"(need {MIN_PAGES_WITH_DESCRIPTIONS}+)"
        ]
    return []


def check_questions(content: str) -> list[str]:
    match = _QUESTION_BLOCK.search(content)
    count = len(re.findall(r"^- .+$", match.group(1), re.MULTILINE)) if match else 0
    if count < MIN_QUESTIONS:
        return [f"Only {count} questions (need {MIN_QUESTIONS}+)"]
    return []


def remove_empty_sections(content: str) -> str:
    """Drop '## ' headings with no content before the next heading or the end.

    Also collapses runs of blank lines to a single blank line.
    """
    lines = content.split("\n")
    result: list[str] = []
    skipping = False

    for index, line in enumerate(lines):
        if line.startswith("## "):
            next_content = next((l for l in lines[index + 1:] if l.strip()), None)
            if next_content is None or next_content.startswith("#"):
                skipping = True
                continue
            skipping = False
        elif line.startswith("#"):
            skipping = False

        if skipping and not line.strip():
            continue
        result.append(line)

    return _EXTRA_BLANK_LINES.sub("\n\n", "\n".join(result))


def validate_output(content: str | None) -> tuple[str, list[str]]:
    """Run all checks and clean up the document.

    Returns:
        Tuple of (cleaned content, warnings)
    """
    content = content or ""
    warnings = (
        check_structure(content)
        + check_summary(content)
        + check_pages(content)
        + check_questions(content)
    )

    if warnings:
        logger.warning(f"llms.txt validation produced {len(warnings)} warnings: {warnings}")

    return remove_empty_sections(content), warnings
