"""Page model for crawled website pages."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageItem:
    """A page in the working set of a generation run.

    Identity is the canonical URL (see ``url_resolver.canonical_key``);
    enrichment produces new instances instead of editing these in place.
    """

    title: str
    url: str
    description: str = ""
    section: str | None = None
    content: str | None = None  # Cleaned body preview, grounding for enrichment
