"""Heuristic ranking of crawled pages for the enrichment call.

Only the top pages reach the token-limited LLM prompt, so the weights below
decide which pages get model-written descriptions:

- 100 if the page is one of the user's important pages
- 20 if it is one of the optional pages
- 4 per keyword found in ``title + description + url`` (case-insensitive)
- ``max(0, 6 - path depth)`` so shallow pages win ties with deep ones

Ties keep crawl order.
"""

import re

from llmstxt_gen.models import PageItem, SurveyInput
from llmstxt_gen.services.url_resolver import (
    canonical_key,
    normalize_base,
    path_depth,
    resolve_all,
    slugify,
)

PRIORITY_WEIGHT = 100
OPTIONAL_WEIGHT = 20
KEYWORD_WEIGHT = 4
SHALLOW_PATH_BONUS = 6
MAX_KEYWORDS = 32
MIN_QUESTION_TOKEN_CHARS = 4

STATIC_KEYWORDS = (
    "pricing", "plans", "billing", "docs", "documentation", "api", "support",
    "faq", "changelog", "security", "integrations", "getting-started", "guides",
    "tutorials", "status", "contact",
)


def build_keyword_set(survey: SurveyInput) -> list[str]:
    """Keywords from categories, question words and a fixed list, first 32."""
    keywords: dict[str, None] = {}

    for category in survey.categories:
        keywords[category.lower()] = None
        keywords[slugify(category)] = None

    for question in survey.questions:
        for token in re.split(r"[^a-z0-9]+", question.lower()):
            if len(token) >= MIN_QUESTION_TOKEN_CHARS:
                keywords[token] = None

    for keyword in STATIC_KEYWORDS:
        keywords[keyword] = None

    return [k for k in keywords if k][:MAX_KEYWORDS]


def url_key_set(survey: SurveyInput, references: tuple[str, ...]) -> set[str]:
    """Canonical keys of page references resolved against the site URL."""
    base_url = normalize_base(survey.site_url)
    return {canonical_key(url) for url in resolve_all(base_url, references)}


def score_page(
    page: PageItem,
    keywords: list[str],
    priority_keys: set[str],
    optional_keys: set[str],
) -> int:
    key = canonical_key(page.url)
    score = 0
    if key in priority_keys:
        score += PRIORITY_WEIGHT
    if key in optional_keys:
        score += OPTIONAL_WEIGHT

    haystack = f"{page.title} {page.description} {page.url}".lower()
    score += KEYWORD_WEIGHT * sum(1 for keyword in keywords if keyword in haystack)

    depth = path_depth(page.url)
    if depth is not None:
        score += max(0, SHALLOW_PATH_BONUS - depth)

    return score


def select_candidates(
    pages: list[PageItem],
    survey: SurveyInput,
    limit: int = 12,
) -> list[PageItem]:
    """Top ``limit`` pages by score, ties broken by crawl order."""
    keywords = build_keyword_set(survey)
    priority_keys = url_key_set(survey, survey.priority_pages)
    optional_keys = url_key_set(survey, survey.optional_pages)

    ranked = sorted(
        enumerate(pages),
        key=lambda entry: (
            -score_page(entry[1], keywords, priority_keys, optional_keys),
            entry[0],
        ),
    )
    return [page for _, page in ranked[:limit]]
