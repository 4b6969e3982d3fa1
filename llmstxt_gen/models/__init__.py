"""Domain models."""

from llmstxt_gen.models.document import GeneratedDocument, PreviewSplit
from llmstxt_gen.models.page import PageItem
from llmstxt_gen.models.run import Run
from llmstxt_gen.models.survey import SiteType, SurveyInput

__all__ = [
    "SurveyInput",
    "SiteType",
    "PageItem",
    "GeneratedDocument",
    "PreviewSplit",
    "Run",
]
