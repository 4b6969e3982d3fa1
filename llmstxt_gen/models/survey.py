"""Survey input describing the site an llms.txt is generated for."""

from dataclasses import dataclass
from enum import Enum


class SiteType(str, Enum):
    """Broad kind of website, used to steer enrichment."""

    DOCS = "docs"
    MARKETING = "marketing"
    SAAS = "saas"
    ECOMMERCE = "ecommerce"
    MARKETPLACE = "marketplace"
    SERVICES = "services"
    EDUCATION = "education"
    MEDIA = "media"


@dataclass(frozen=True)
class SurveyInput:
    """Normalized answers from the generation survey.

    List fields are already split and cleaned; page references are raw
    (relative or absolute) and get resolved against ``site_url`` later.
    """

    site_name: str
    site_url: str
    summary: str
    site_type: SiteType = SiteType.MARKETING
    categories: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    priority_pages: tuple[str, ...] = ()
    optional_pages: tuple[str, ...] = ()
    questions: tuple[str, ...] = ()
