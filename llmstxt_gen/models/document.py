"""Generated llms.txt document and its pre-payment preview."""

from dataclasses import dataclass, field


@dataclass
class GeneratedDocument:
    """Result of a successful generation run."""

    content: str
    mode: str = "live"
    warnings: list[str] = field(default_factory=list)
    enrichment_used: bool = False
    page_count: int = 0


@dataclass(frozen=True)
class PreviewSplit:
    """Visible prefix plus masked remainder shown before payment."""

    visible: str
    locked: str
