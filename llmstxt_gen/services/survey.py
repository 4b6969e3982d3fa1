"""Survey normalization and validation.

Raw survey answers arrive as loosely formatted strings. They are validated
field by field before any generation work starts, then normalized into an
immutable ``SurveyInput``.
"""

from typing import Any
from urllib.parse import urlparse

from llmstxt_gen.models import SiteType, SurveyInput
from llmstxt_gen.services.list_parser import split_list
from llmstxt_gen.services.url_resolver import normalize_site_url

MIN_SUMMARY_LENGTH = 20
MIN_IMPORTANT_PAGES = 3
MAX_IMPORTANT_PAGES = 8

_SITE_TYPE_VALUES = {site_type.value for site_type in SiteType}


def _text(params: dict[str, Any], key: str) -> str:
    value = params.get(key)
    return "" if value is None else str(value).strip()


def infer_site_type(params: dict[str, Any]) -> SiteType:
    """Use the explicit site type if valid, otherwise guess from URL and summary."""
    explicit = _text(params, "site_type")
    if explicit in _SITE_TYPE_VALUES:
        return SiteType(explicit)

    url = _text(params, "site_url").lower()
    summary = _text(params, "summary").lower()

    def in_either(words: tuple[str, ...]) -> bool:
        return any(w in url or w in summary for w in words)

    if "docs." in url or "documentation" in summary:
        return SiteType.DOCS
    if in_either(("shop", "store", "cart", "checkout", "product")):
        return SiteType.ECOMMERCE
    if any(w in summary for w in ("saas", "software", "platform", "app", "dashboard")):
        return SiteType.SAAS
    if any(w in summary for w in ("agency", "consulting", "service")):
        return SiteType.SERVICES
    if in_either(("learn", "course", "training", "academy")):
        return SiteType.EDUCATION
    if any(w in url for w in ("blog", "news", "magazine")):
        return SiteType.MEDIA
    return SiteType.MARKETING


def normalize_params(params: dict[str, Any]) -> dict[str, Any]:
    """Trim raw answers and fill derived fields.

    ``important_pages`` is the current survey field name; ``priority_pages``
    is still accepted from older clients.
    """
    priority = _text(params, "important_pages") or _text(params, "priority_pages")

    return {
        "site_name": _text(params, "site_name"),
        "site_url": normalize_site_url(_text(params, "site_url")),
        "summary": _text(params, "summary"),
        "categories": _text(params, "categories"),
        "site_type": infer_site_type(params),
        "excludes": _text(params, "excludes"),
        "priority_pages": priority,
        "optional_pages": _text(params, "optional_pages"),
        "questions": _text(params, "questions"),
    }


def build_survey_input(params: dict[str, Any]) -> SurveyInput:
    """Normalize raw answers into a ``SurveyInput``."""
    normalized = normalize_params(params)
    return SurveyInput(
        site_name=normalized["site_name"],
        site_url=normalized["site_url"],
        summary=normalized["summary"],
        site_type=normalized["site_type"],
        categories=tuple(split_list(normalized["categories"])),
        excludes=tuple(split_list(normalized["excludes"])),
        priority_pages=tuple(split_list(normalized["priority_pages"])),
        optional_pages=tuple(split_list(normalized["optional_pages"])),
        questions=tuple(split_list(normalized["questions"])),
    )


def _validate_site_url(url: str) -> str | None:
    """Validate URL format. Returns error message or None if valid."""
    if not url:
        return "Enter your homepage URL."

    try:
        parsed = urlparse(url)
    except ValueError:
        return "Enter a valid URL starting with http or https."

    if parsed.scheme not in ("http", "https"):
        return "Use an http or https URL."

    if not parsed.netloc:
        return "Enter a valid URL starting with http or https."

    return None


def validate_params(params: dict[str, Any]) -> dict[str, str]:
    """Check raw answers; returns field name -> message for each problem."""
    errors: dict[str, str] = {}
    normalized = normalize_params(params)

    if not normalized["site_name"]:
        errors["site_name"] = "Enter a project or brand name."

    url_error = _validate_site_url(normalized["site_url"])
    if url_error:
        errors["site_url"] = url_error

    if len(normalized["summary"]) < MIN_SUMMARY_LENGTH:
        errors["summary"] = "Describe what your business does (20+ characters)."

    important_count = len(split_list(normalized["priority_pages"]))
    if not MIN_IMPORTANT_PAGES <= important_count <= MAX_IMPORTANT_PAGES:
        errors["important_pages"] = "Add 3-8 important page URLs."

    return errors
