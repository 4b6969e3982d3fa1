"""Assembly of the final llms.txt markdown document."""

import logging
import re
from urllib.parse import urlparse

from llmstxt_gen.models import PageItem, SurveyInput
from llmstxt_gen.services.list_parser import normalize_whitespace
from llmstxt_gen.services.url_resolver import (
    canonical_key,
    normalize_base,
    resolve_all,
    title_from_url,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Your Project"
DEFAULT_SUMMARY = "A factual, one sentence description of who this site helps and what it provides."
QUESTIONS_HEADING = "Key questions this site answers:"

MAX_QUESTIONS = 6
MAX_PAGES_PER_SECTION = 6
MAX_OPTIONAL_PAGES = 4
MIN_DESCRIPTION_CHARS = 20

PLACEHOLDER_PHRASES = (
    "user-prioritized page",
    "nice-to-have context",
    "summary not available",
    "see site for details",
)

# Checked in order; the first section with a matching keyword wins
SECTION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Getting Started": ("getting-started", "quickstart", "start", "begin", "intro", "introduction", "setup", "install"),
    "Documentation": ("docs", "documentation", "reference", "manual", "guide", "guides"),
    "API": ("api", "apis", "endpoint", "endpoints", "developer", "developers"),
    "Pricing": ("pricing", "price", "plans", "plan", "billing", "cost", "costs"),
    "Products": ("product", "products", "features", "feature", "shop", "store", "collections"),
    "Support": ("support", "help", "faq", "faqs", "contact", "us"),
    "About": ("about", "company", "team", "who", "mission", "values"),
    "Blog": ("blog", "news", "articles", "posts", "updates"),
}

SECTION_ORDER = [
    "Getting Started",
    "Products",
    "Pricing",
    "Documentation",
    "API",
    "Support",
    "About",
    "Blog",
    "Other",
]

# Path pattern -> description used when a listed page has nothing better
CONTEXTUAL_DESCRIPTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"pric"), "View pricing plans and billing options."),
    (re.compile(r"doc|guide|tutorial"), "Read documentation and guides."),
    (re.compile(r"api"), "Explore API reference and endpoints."),
    (re.compile(r"support|help|faq"), "Get help and find answers to common questions."),
    (re.compile(r"about|team|company"), "Learn about the company and team."),
    (re.compile(r"contact"), "Get in touch and find contact information."),
    (re.compile(r"blog|news"), "Read latest news and articles."),
    (re.compile(r"product|feature"), "Explore product features and capabilities."),
    (re.compile(r"collection|shop|store"), "Browse products and collections."),
]


def is_meaningful_description(description: str | None) -> bool:
    """At least 20 characters and not one of the known placeholder phrases."""
    if not description or not description.strip():
        return False
    if len(description) < MIN_DESCRIPTION_CHARS:
        return False
    lowered = description.lower()
    return not any(phrase in lowered for phrase in PLACEHOLDER_PHRASES)


def contextual_description(url: str, title: str) -> str:
    """Generic description inferred from the URL path."""
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        path = ""

    for pattern, description in CONTEXTUAL_DESCRIPTIONS:
        if pattern.search(path):
            return description
    return f"Learn more about {title.lower()}."


def infer_section(page: PageItem) -> str:
    """Explicit section if set, else keyword match on URL and title, else Other."""
    if page.section:
        return page.section

    url_lower = page.url.lower()
    title_lower = page.title.lower()
    for section, keywords in SECTION_KEYWORDS.items():
        if any(k in url_lower or k in title_lower for k in keywords):
            return section
    return "Other"


def group_pages_by_topic(pages: list[PageItem]) -> list[tuple[str, list[PageItem]]]:
    """Group pages into sections in display order.

    Known sections follow SECTION_ORDER; sections taken from user categories
    come after them in order of first appearance.
    """
    grouped: dict[str, list[PageItem]] = {}
    for page in pages:
        grouped.setdefault(infer_section(page), []).append(page)

    ordered = [(name, grouped[name]) for name in SECTION_ORDER if name in grouped]
    ordered += [(name, items) for name, items in grouped.items() if name not in SECTION_ORDER]
    return ordered


def format_page(page: PageItem) -> str:
    return f"- [{page.title}]({page.url}): {page.description}"


def format_question(question: str) -> str:
    clean = normalize_whitespace(question)
    return f"- {clean if clean.endswith('?') else f'{clean}?'}"


class TemplateBuilder:
    """Builds llms.txt markdown from survey answers and the page working set.

    Pure string assembly: the same inputs always give the same document.
    """

    def _listed_item(self, url: str, pages_by_key: dict[str, PageItem]) -> PageItem:
        """Entry for a user-listed URL, synthesized where crawl data is missing."""
        existing = pages_by_key.get(canonical_key(url))
        if existing and is_meaningful_description(existing.description):
            return existing
        if existing:
            return PageItem(
                section=existing.section,
                title=existing.title,
                url=url,
                description=contextual_description(url, existing.title),
            )

        title = title_from_url(url)
        return PageItem(
            section=None,
            title=title,
            url=url,
            description=contextual_description(url, title),
        )

    def build(
        self,
        survey: SurveyInput,
        pages: list[PageItem],
        questions: list[str],
        summary: str | None = None,
    ) -> str:
        title = normalize_whitespace(survey.site_name) or DEFAULT_TITLE
        summary_line = normalize_whitespace(summary or survey.summary) or DEFAULT_SUMMARY
        base_url = normalize_base(survey.site_url)

        priority_urls = resolve_all(base_url, survey.priority_pages)
        priority_keys = {canonical_key(url) for url in priority_urls}
        optional_urls = [
            url for url in resolve_all(base_url, survey.optional_pages)
            if canonical_key(url) not in priority_keys
        ]
        optional_keys = {canonical_key(url) for url in optional_urls}

        pages_by_key: dict[str, PageItem] = {}
        for page in pages:
            pages_by_key.setdefault(canonical_key(page.url), page)

        priority_items = [self._listed_item(url, pages_by_key) for url in priority_urls]
        optional_items = [self._listed_item(url, pages_by_key) for url in optional_urls]

        lines = [f"# {title}", "", f"> {summary_line}", ""]

        if questions:
            lines.append(QUESTIONS_HEADING)
            lines.extend(format_question(q) for q in questions[:MAX_QUESTIONS])
            lines.append("")

        remaining = [
            page for page in pages
            if canonical_key(page.url) not in priority_keys
            and canonical_key(page.url) not in optional_keys
        ]
        all_items: list[PageItem] = []
        seen: set[str] = set()
        for item in priority_items:
            if not is_meaningful_description(item.description):
                logger.debug(f"Priority page {item.url} omitted: no usable description")

        for page in priority_items + remaining:
            key = canonical_key(page.url)
            if key not in seen:
                seen.add(key)
                all_items.append(page)

        for section, section_pages in group_pages_by_topic(all_items):
            valid_pages = [p for p in section_pages if is_meaningful_description(p.description)]
            valid_pages = valid_pages[:MAX_PAGES_PER_SECTION]
            if not valid_pages:
                continue

            lines.append(f"## {section}")
            lines.extend(format_page(page) for page in valid_pages)
            lines.append("")

        valid_optional = [p for p in optional_items if is_meaningful_description(p.description)]
        valid_optional = valid_optional[:MAX_OPTIONAL_PAGES]
        if valid_optional:
            lines.append("## Optional")
            lines.extend(format_page(page) for page in valid_optional)
            lines.append("")

        logger.debug(
            f"Built llms.txt for {base_url}: {len(priority_items)} priority, "
            f"{len(valid_optional)} optional, {len(questions)} questions"
        )
        return "\n".join(lines)
