"""URL normalization and resolution for user-supplied page references."""

import re
from urllib.parse import unquote_plus, urljoin, urlparse

DEFAULT_BASE_URL = "https://example.com"

_HAS_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_BARE_DOMAIN = re.compile(r"^[\w.-]+\.\w{2,}(/.*)?")


def normalize_site_url(value: str | None) -> str:
    """Trim a site URL and add ``https://`` to bare domains.

    Anything that neither has a scheme nor looks like ``name.tld`` is
    returned trimmed but otherwise untouched; validation rejects it later.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        return ""
    if _HAS_SCHEME.match(trimmed):
        return trimmed
    if _BARE_DOMAIN.match(trimmed):
        return f"https://{trimmed}"
    return trimmed


def normalize_base(value: str | None) -> str:
    """Absolute base URL without trailing slashes, never empty."""
    normalized = normalize_site_url(value)
    if not normalized:
        return DEFAULT_BASE_URL
    return normalized.rstrip("/") or DEFAULT_BASE_URL


def canonical_key(url: str) -> str:
    """Comparison key for a URL: lowercase, no trailing slashes."""
    return url.rstrip("/").lower()


def resolve(base_url: str, reference: str) -> str | None:
    """Resolve a relative or absolute page reference against the site base.

    Returns None for blank references. A reference that cannot be parsed
    is returned trimmed as-is rather than failing the caller.
    """
    trimmed = (reference or "").strip()
    if not trimmed:
        return None

    base = base_url if base_url.endswith("/") else f"{base_url}/"
    try:
        return urljoin(base, trimmed).rstrip("/")
    except ValueError:
        return trimmed


def resolve_all(base_url: str, references: list[str] | tuple[str, ...]) -> list[str]:
    """Resolve references, dropping blanks and canonical duplicates."""
    resolved: list[str] = []
    seen: set[str] = set()
    for reference in references:
        url = resolve(base_url, reference)
        if url is None:
            continue
        key = canonical_key(url)
        if key in seen:
            continue
        seen.add(key)
        resolved.append(url)
    return resolved


def slugify(value: str) -> str:
    """Lowercase, non-alphanumeric runs become single hyphens."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def path_depth(url: str) -> int | None:
    """Number of non-empty path segments, or None if the URL won't parse."""
    try:
        path = urlparse(url).path
    except ValueError:
        return None
    return len([segment for segment in path.split("/") if segment])


def title_from_url(url: str) -> str:
    """Readable title from the last path segment, falling back to the host.

    ``https://acme.com/getting_started/`` becomes ``Getting Started``.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return url

    segments = [segment for segment in parsed.path.rstrip("/").split("/") if segment]
    host = parsed.hostname or url
    if not segments:
        return host

    spaced = re.sub(r"[-_]+", " ", unquote_plus(segments[-1]))
    words = spaced.split()
    if not words:
        return host
    return " ".join(word.capitalize() for word in words)
