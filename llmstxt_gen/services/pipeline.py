"""Generation pipeline: crawl, rank, enrich, build, validate.

Stages run strictly in sequence for a single request. A crawl failure stops
the run; enrichment failures degrade to unenriched content; validation only
adds warnings.
"""

import logging
import time
from typing import Any

from llmstxt_gen.config import Settings
from llmstxt_gen.models import GeneratedDocument, PageItem, SurveyInput
from llmstxt_gen.services.errors import ConfigurationError
from llmstxt_gen.services.firecrawl_crawler import FirecrawlCrawler
from llmstxt_gen.services.llm_enricher import EnrichmentResult, LLMEnricher
from llmstxt_gen.services.output_validator import validate_output
from llmstxt_gen.services.page_ranker import select_candidates
from llmstxt_gen.services.survey import build_survey_input
from llmstxt_gen.services.template_builder import TemplateBuilder

logger = logging.getLogger(__name__)


class GenerationPipeline:
    """Runs the llms.txt generation stages for one survey at a time.

    Provider clients are optional: without a crawler every run fails with
    ConfigurationError, without an enricher every run is unenriched.
    """

    def __init__(
        self,
        settings: Settings,
        crawler: FirecrawlCrawler | None = None,
        enricher: LLMEnricher | None = None,
        builder: TemplateBuilder | None = None,
    ):
        self.settings = settings
        self.crawler = crawler
        self.enricher = enricher
        self.builder = builder or TemplateBuilder()

    def crawl(self, survey: SurveyInput) -> list[PageItem]:
        if self.crawler is None:
            logger.error("Crawl requested but FIRECRAWL_API_KEY is not configured")
            raise ConfigurationError()
        return self.crawler.crawl(survey)

    def enrich(
        self,
        survey: SurveyInput,
        pages: list[PageItem],
        candidates: list[PageItem] | None = None,
    ) -> EnrichmentResult:
        """Enrich if an enricher is configured and there is something to enrich."""
        if self.enricher is None or not pages or (candidates is not None and not candidates):
            logger.info("Enrichment skipped (no LLM credential or no candidate pages)")
            return EnrichmentResult.fallback(survey, pages)
        return self.enricher.enrich(survey, pages, candidates)

    def run(self, survey: SurveyInput) -> GeneratedDocument:
        """Generate llms.txt content for a normalized survey.

        Raises:
            CrawlUnavailableError: crawl provider missing or failing
        """
        started = time.monotonic()
        logger.info(f"Generating llms.txt for {survey.site_url}")

        pages = self.crawl(survey)

        candidates = select_candidates(pages, survey, self.settings.enrichment_max_pages)
        enrichment = self.enrich(survey, pages, candidates)

        content = self.builder.build(
            survey,
            enrichment.pages,
            enrichment.questions,
            enrichment.summary,
        )
        content, warnings = validate_output(content)

        elapsed = time.monotonic() - started
        logger.info(
            f"Generated llms.txt for {survey.site_url} in {elapsed:.1f}s "
            f"({len(pages)} pages, enrichment_used={enrichment.used}, {len(warnings)} warnings)"
        )

        return GeneratedDocument(
            content=content,
            mode="live",
            warnings=warnings,
            enrichment_used=enrichment.used,
            page_count=len(enrichment.pages),
        )

    def generate(self, params: dict[str, Any]) -> GeneratedDocument:
        """Normalize raw survey answers and run the pipeline."""
        return self.run(build_survey_input(params))


def build_pipeline(settings: Settings) -> GenerationPipeline:
    """Wire the pipeline with whichever provider clients are configured."""
    crawler = FirecrawlCrawler(settings) if settings.firecrawl_api_key else None
    enricher = LLMEnricher(settings) if settings.llm_api_key else None

    if crawler is None:
        logger.warning("FIRECRAWL_API_KEY not set; generation will be unavailable")
    if enricher is None:
        logger.info(f"No API key for {settings.llm_provider}; enrichment disabled")

    return GenerationPipeline(settings, crawler=crawler, enricher=enricher)
