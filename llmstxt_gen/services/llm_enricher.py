"""LLM enrichment of survey answers and crawled pages.

Enrichment is best-effort: any provider or parsing failure falls back to
the unenriched inputs so generation never fails because of it.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any

from llmstxt_gen.config import Settings
from llmstxt_gen.models import PageItem, SurveyInput
from llmstxt_gen.prompts import ENRICHMENT_SYSTEM_PROMPT
from llmstxt_gen.services.list_parser import normalize_whitespace, question_key
from llmstxt_gen.services.page_ranker import select_candidates
from llmstxt_gen.services.url_resolver import canonical_key

logger = logging.getLogger(__name__)

MAX_DESC_CHARS = 140
MAX_TITLE_CHARS = 60
MAX_SOURCE_CHARS = 400
MAX_CONTENT_CHARS = 600
MIN_SUMMARY_CHARS = 30
MIN_LLM_QUESTIONS = 4


@dataclass
class EnrichmentResult:
    """Pages, questions and summary after (possibly skipped) enrichment."""

    pages: list[PageItem]
    questions: list[str]
    summary: str
    used: bool = False
    candidates: list[PageItem] = field(default_factory=list)

    @classmethod
    def fallback(cls, survey: SurveyInput, pages: list[PageItem]) -> "EnrichmentResult":
        """The inputs unchanged, marked as not enriched."""
        return cls(
            pages=list(pages),
            questions=list(survey.questions),
            summary=survey.summary,
            used=False,
        )


def trim_to(value: str | None, max_chars: int) -> str:
    """Collapse whitespace and cut to ``max_chars``, marking cuts with '...'."""
    clean = normalize_whitespace(value)
    if len(clean) <= max_chars:
        return clean
    return f"{clean[:max_chars - 1].strip()}..."


def parse_llm_json(response: str | None) -> dict[str, Any] | None:
    """Parse the model's JSON reply.

    Falls back to the span between the first '{' and the last '}' when the
    reply has prose or code fences around the object. Returns None when
    nothing parses to a JSON object.
    """
    if not response:
        return None

    try:
        data = json.loads(response)
    except json.JSONDecodeError:
        start = response.find("{")
        end = response.rfind("}")
        if start == -1 or end == -1 or end < start:
            return None
        try:
            data = json.loads(response[start:end + 1])
        except json.JSONDecodeError:
            return None

    return data if isinstance(data, dict) else None


def merge_questions(
    llm_questions: Any,
    user_questions: list[str] | tuple[str, ...],
    max_questions: int = 6,
) -> list[str]:
    """Prefer model questions; top up with the user's own when it gave too few."""
    if not isinstance(llm_questions, list):
        llm_questions = []

    generated = [
        q.strip() for q in llm_questions if isinstance(q, str) and q.strip()
    ][:max_questions]

    if len(generated) >= MIN_LLM_QUESTIONS:
        return generated

    seen = {question_key(q) for q in generated}
    additions = []
    for question in user_questions:
        key = question_key(question)
        if not key or key in seen:
            continue
        seen.add(key)
        additions.append(question)

    return (generated + additions)[:max_questions]


def merge_by_key(
    pages: list[PageItem],
    updates: Any,
    allowed_keys: set[str] | None = None,
) -> list[PageItem]:
    """Apply model-suggested titles/descriptions to existing pages.

    Returns a new list, one page per canonical URL in original order.
    Updates for URLs outside ``pages`` (or outside ``allowed_keys`` when
    given) are ignored, so the model can never add pages.
    """
    merged: dict[str, PageItem] = {}
    for page in pages:
        merged.setdefault(canonical_key(page.url), page)

    if not isinstance(updates, list):
        updates = []

    for update in updates:
        if not isinstance(update, dict) or not isinstance(update.get("url"), str):
            continue
        key = canonical_key(update["url"])
        target = merged.get(key)
        if target is None or (allowed_keys is not None and key not in allowed_keys):
            continue

        changes = {}
        title = update.get("title")
        if isinstance(title, str) and title.strip():
            changes["title"] = trim_to(title, MAX_TITLE_CHARS)
        description = update.get("description")
        if isinstance(description, str) and description.strip():
            changes["description"] = trim_to(description, MAX_DESC_CHARS)

        if changes:
            merged[key] = replace(target, **changes)

    return list(merged.values())


class LLMEnricher:
    """Enriches survey answers and page descriptions using LLM APIs."""

    def __init__(self, settings: Settings):
        if not settings.llm_api_key:
            raise ValueError(f"API key for LLM provider '{settings.llm_provider}' is required")

        self.settings = settings
        self.max_pages = settings.enrichment_max_pages
        self.max_questions = settings.max_questions
        self._openai_client = None
        self._anthropic_client = None

    def _get_openai_client(self):
        """Lazy load OpenAI client."""
        if self._openai_client is None:
            from openai import OpenAI
            self._openai_client = OpenAI(
                api_key=self.settings.openai_api_key,
                base_url=self.settings.openai_base_url,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=0,
            )
        return self._openai_client

    def _get_anthropic_client(self):
        """Lazy load Anthropic client."""
        if self._anthropic_client is None:
            from anthropic import Anthropic
            self._anthropic_client = Anthropic(
                api_key=self.settings.anthropic_api_key,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=0,
            )
        return self._anthropic_client

    def _call_openai(self, system_prompt: str, user_content: str) -> str | None:
        client = self._get_openai_client()

        response = client.chat.completions.create(
            model=self.settings.llm_model,
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
        )

        return response.choices[0].message.content

    def _call_anthropic(self, system_prompt: str, user_content: str) -> str | None:
        client = self._get_anthropic_client()

        response = client.messages.create(
            model=self.settings.llm_model,
            max_tokens=self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_content}],
        )

        return response.content[0].text

    def _call_llm(self, system_prompt: str, user_content: str) -> str | None:
        """Call configured LLM provider."""
        provider = self.settings.llm_provider
        logger.info(f"Calling {provider} {self.settings.llm_model}...")

        if provider == "openai":
            return self._call_openai(system_prompt, user_content)
        elif provider == "anthropic":
            return self._call_anthropic(system_prompt, user_content)
        else:
            raise ValueError(f"Unknown LLM provider: {provider}")

    def build_prompt_payload(
        self,
        survey: SurveyInput,
        candidates: list[PageItem],
    ) -> dict[str, Any]:
        """Site metadata plus size-bounded candidate pages for the user message."""
        pages = []
        for page in candidates:
            entry = {
                "url": page.url,
                "title": trim_to(page.title, MAX_TITLE_CHARS),
                "currentDescription": trim_to(page.description, MAX_SOURCE_CHARS),
            }
            if page.content:
                entry["contentPreview"] = trim_to(page.content, MAX_CONTENT_CHARS)
            pages.append(entry)

        return {
            "site": {
                "name": survey.site_name,
                "url": survey.site_url,
                "userDescription": survey.summary,
                "siteType": survey.site_type.value,
            },
            "pages": pages,
        }

    def enrich(
        self,
        survey: SurveyInput,
        pages: list[PageItem],
        candidates: list[PageItem] | None = None,
    ) -> EnrichmentResult:
        """Ask the model for a summary, questions and page descriptions.

        Args:
            survey: Normalized survey answers
            pages: Full crawled working set
            candidates: Pages to send to the model; ranked from ``pages``
                when not given

        Returns:
            EnrichmentResult; ``used`` is False whenever the call or the
            response parsing failed, with all inputs left untouched.
        """
        if not pages:
            return EnrichmentResult.fallback(survey, pages)

        if candidates is None:
            candidates = select_candidates(pages, survey, self.max_pages)
        if not candidates:
            logger.info("No candidate pages to enrich, using unenriched content")
            return EnrichmentResult.fallback(survey, pages)

        payload = self.build_prompt_payload(survey, candidates)

        try:
            response = self._call_llm(ENRICHMENT_SYSTEM_PROMPT, json.dumps(payload, indent=2))
        except Exception as e:
            logger.warning(f"Enrichment call failed, using unenriched content: {e}")
            return EnrichmentResult.fallback(survey, pages)

        data = parse_llm_json(response)
        if data is None:
            logger.warning("Enrichment response was not valid JSON, using unenriched content")
            return EnrichmentResult.fallback(survey, pages)

        summary = survey.summary
        llm_summary = data.get("summary")
        if isinstance(llm_summary, str) and len(llm_summary.strip()) >= MIN_SUMMARY_CHARS:
            summary = llm_summary.strip()

        questions = merge_questions(data.get("questions"), survey.questions, self.max_questions)

        allowed_keys = {canonical_key(page.url) for page in candidates}
        merged_pages = merge_by_key(pages, data.get("pages"), allowed_keys)

        logger.info(
            f"Enrichment applied: {len(candidates)} candidates, "
            f"{len(questions)} questions, summary {'replaced' if summary != survey.summary else 'kept'}"
        )

        return EnrichmentResult(
            pages=merged_pages,
            questions=questions,
            summary=summary,
            used=True,
            candidates=list(candidates),
        )
