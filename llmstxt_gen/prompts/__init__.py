"""LLM prompts for various tasks."""

from llmstxt_gen.prompts.enrichment import ENRICHMENT_SYSTEM_PROMPT

__all__ = [
    "ENRICHMENT_SYSTEM_PROMPT",
]
