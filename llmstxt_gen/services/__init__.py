"""Business logic services."""

from llmstxt_gen.services.firecrawl_crawler import FirecrawlCrawler
from llmstxt_gen.services.llm_enricher import EnrichmentResult, LLMEnricher
from llmstxt_gen.services.pipeline import GenerationPipeline, build_pipeline
from llmstxt_gen.services.preview import split_preview
from llmstxt_gen.services.template_builder import TemplateBuilder

__all__ = [
    "FirecrawlCrawler",
    "LLMEnricher",
    "EnrichmentResult",
    "GenerationPipeline",
    "build_pipeline",
    "split_preview",
    "TemplateBuilder",
]
