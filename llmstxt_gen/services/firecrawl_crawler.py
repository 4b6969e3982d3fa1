"""Site crawling through the Firecrawl API."""

import logging
import re
from typing import Any

from firecrawl import Firecrawl
from firecrawl.v2.types import ScrapeOptions

from llmstxt_gen.config import Settings
from llmstxt_gen.models import PageItem, SurveyInput
from llmstxt_gen.services.errors import ConfigurationError, CrawlUnavailableError
from llmstxt_gen.services.list_parser import normalize_whitespace
from llmstxt_gen.services.url_resolver import canonical_key, slugify

logger = logging.getLogger(__name__)

FALLBACK_SECTION = "Core documentation"

MIN_META_DESCRIPTION_CHARS = 20
MIN_BODY_LINE_CHARS = 30
MAX_DESCRIPTION_CHARS = 160
MIN_PREVIEW_LINE_CHARS = 20
MAX_PREVIEW_LINES = 8
MAX_PREVIEW_CHARS = 800

_CODE_BLOCK = re.compile(r"```.*?```", re.DOTALL)
_MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_MARKUP_CHARS = re.compile(r"[#*_`]")

# Firecrawl job statuses that mean the crawl did not produce usable data
_FAILED_STATUSES = {"failed", "cancelled"}


def guess_section(url: str, categories: tuple[str, ...] | list[str]) -> str:
    """First category whose slug appears in the URL, else the first category."""
    for category in categories:
        if slugify(category) in url:
            return category
    if categories:
        return categories[0]
    return FALLBACK_SECTION


def extract_description(markdown: str, meta_description: str | None) -> str:
    """Pick a short page description.

    Uses the page's meta description when it says something; otherwise the
    first substantial prose line of the body (no headings, code fences or
    list items).
    """
    clean_meta = normalize_whitespace(meta_description)
    if len(clean_meta) > MIN_META_DESCRIPTION_CHARS:
        return clean_meta
    if not markdown or not markdown.strip():
        return ""

    for raw_line in markdown.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith(("#", "```", "-")):
            continue
        if len(line) > MIN_BODY_LINE_CHARS:
            return normalize_whitespace(line)[:MAX_DESCRIPTION_CHARS]
    return ""


def extract_content_preview(markdown: str) -> str:
    """Plain-text preview of the page body for grounding enrichment."""
    if not markdown or not markdown.strip():
        return ""

    text = _CODE_BLOCK.sub("", markdown)
    text = _MARKDOWN_LINK.sub(r"\1", text)
    text = _MARKUP_CHARS.sub("", text)

    lines = [line.strip() for line in text.split("\n")]
    substantial = [line for line in lines if len(line) >= MIN_PREVIEW_LINE_CHARS]
    return normalize_whitespace(" ".join(substantial[:MAX_PREVIEW_LINES]))[:MAX_PREVIEW_CHARS]


def map_document(
    doc: Any,
    categories: tuple[str, ...] | list[str],
    excludes: tuple[str, ...] | list[str],
) -> PageItem | None:
    """Convert a Firecrawl document into a PageItem, or None to skip it."""
    meta = getattr(doc, "metadata", None)
    url = getattr(meta, "url", "") or getattr(meta, "source_url", "") or ""
    if not url:
        return None
    if any(exclude in url for exclude in excludes):
        return None

    markdown = getattr(doc, "markdown", "") or ""
    title = normalize_whitespace(getattr(meta, "title", "") or "") or url

    return PageItem(
        section=guess_section(url, categories),
        title=title,
        url=url,
        description=extract_description(markdown, getattr(meta, "description", "") or ""),
        content=extract_content_preview(markdown),
    )


class FirecrawlCrawler:
    """Crawl websites using Firecrawl API for content extraction."""

    def __init__(self, settings: Settings, client: Any | None = None):
        """Initialize crawler with settings.

        Args:
            settings: Application settings containing Firecrawl API key
            client: Pre-built Firecrawl client (tests inject a fake here)
        """
        if client is None:
            if not settings.firecrawl_api_key:
                raise ConfigurationError()
            client = Firecrawl(api_key=settings.firecrawl_api_key)

        self.client = client
        self.max_pages = settings.firecrawl_max_pages
        self.timeout = settings.firecrawl_timeout_seconds
        self.poll_interval = settings.firecrawl_poll_interval_seconds

    def crawl(self, survey: SurveyInput) -> list[PageItem]:
        """Crawl the survey's site and map results into PageItems.

        Pages are deduplicated by canonical URL, keeping crawl order.

        Raises:
            CrawlUnavailableError: on transport errors, timeouts, or a
                crawl job Firecrawl reports as failed.
        """
        start_url = survey.site_url
        logger.info(f"Starting Firecrawl crawl of {start_url} (max {self.max_pages} pages)")

        try:
            result = self.client.crawl(
                url=start_url,
                limit=self.max_pages,
                scrape_options=ScrapeOptions(
                    formats=["markdown"],
                    only_main_content=True,
                ),
                poll_interval=self.poll_interval,
                timeout=self.timeout,
            )
        except Exception as e:
            logger.error(f"Firecrawl error for {start_url}: {e}")
            raise CrawlUnavailableError() from e

        status = getattr(result, "status", None)
        if status in _FAILED_STATUSES:
            logger.error(f"Firecrawl job for {start_url} ended with status {status}")
            raise CrawlUnavailableError()

        data = getattr(result, "data", None) or []

        pages: list[PageItem] = []
        seen: set[str] = set()
        for doc in data:
            page = map_document(doc, survey.categories, survey.excludes)
            if page is None:
                continue
            key = canonical_key(page.url)
            if key in seen:
                continue
            seen.add(key)
            pages.append(page)

        logger.info(f"Firecrawl completed: {len(pages)} pages kept of {len(data)} crawled")
        return pages
