# realhouse_seo/urls/seo_helpers.py

"""Miscellaneous SEO URL helpers: locales, sitemaps, validation, tracking."""

import logging
import re
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from realhouse_seo.config.settings import Settings
from realhouse_seo.urls.slug_codec import absolute_url, normalize_url

logger = logging.getLogger("realhouse_seo.urls")

_REPEATED_SLASH_RE = re.compile(r"//+")
_NON_SEO_CHAR_RE = re.compile(r"[^a-z0-9\-/?=&.]")

_UTM_KEYS: tuple[str, ...] = ("source", "medium", "campaign", "content", "term")


def hreflang_urls(path: str) -> dict[str, str]:
    """Absolute URL per locale for *path*, plus ``x-default``.

    The default locale lives at the site root; the others are prefixed
    with their locale code (``/ar/properties``).
    """
    normalized, query = normalize_url(path)
    base_path = "" if normalized == "/" else normalized
    if query:
        base_path = f"{base_path}?{query}"
    origin = Settings.SITE_ORIGIN.rstrip("/")

    urls: dict[str, str] = {}
    for locale in Settings.LOCALES:
        if locale == Settings.DEFAULT_LOCALE:
            urls[locale] = f"{origin}{base_path}"
        else:
            urls[locale] = f"{origin}/{locale}{base_path}"
    urls["x-default"] = f"{origin}{base_path}"
    return urls


def static_page_urls() -> list[str]:
    """Site-relative paths of every static page, in registry order."""
    return [page["path"] for page in Settings.STATIC_PAGES]


def sitemap_schema(urls: list[str]) -> dict[str, Any]:
    """schema.org ``ItemList`` describing sitemap URLs (1-indexed)."""
    return {
        "@context": "https://schema.org",
        "@type": "ItemList",
        "itemListElement": [
            {"@type": "ListItem", "position": index, "url": absolute_url(url)}
            for index, url in enumerate(urls, 1)
        ],
    }


def validate_seo_url(url: str) -> tuple[bool, list[str]]:
    """Check a site-relative URL against the SEO URL conventions.

    Returns ``(valid, issues)`` where *issues* lists every problem found.
    """
    issues: list[str] = []
    path = url.split("?", 1)[0]

    if url != url.lower():
        issues.append("URL contains uppercase characters")
    if "_" in url:
        issues.append("URL contains underscores (use hyphens instead)")
    if path != "/" and path.endswith("/"):
        issues.append("URL has trailing slash")
    if _REPEATED_SLASH_RE.search(url) and not url.startswith("http"):
        issues.append("URL has multiple consecutive slashes")
    if _NON_SEO_CHAR_RE.search(url):
        issues.append("URL contains non-SEO-friendly characters")
    if len(path) > Settings.SEO_PATH_MAX_LENGTH:
        issues.append(
            f"URL path exceeds {Settings.SEO_PATH_MAX_LENGTH} characters"
        )

    return not issues, issues


def is_external_url(url: str) -> bool:
    """True for absolute URLs pointing at a host other than the site."""
    if not url or url.startswith(("/", "#")):
        return False
    try:
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            return False
        hostname = parts.hostname
    except ValueError as exc:
        logger.debug("Unparseable URL %r treated as internal: %s", url, exc)
        return False
    return hostname not in Settings.SITE_HOSTS


def add_utm_params(url: str, **params: str) -> str:
    """Attach ``utm_*`` tracking parameters to *url*.

    Accepts ``source``, ``medium``, ``campaign``, ``content`` and
    ``term``; other keywords are ignored. Site-relative URLs are made
    absolute first. Existing ``utm_*`` values are replaced.
    """
    parts = urlsplit(absolute_url(url))
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    for key in _UTM_KEYS:
        value = params.get(key)
        if value:
            query[f"utm_{key}"] = value
    ignored = set(params) - set(_UTM_KEYS)
    if ignored:
        logger.debug("Ignoring unknown UTM keys: %s", sorted(ignored))
    return urlunsplit(parts._replace(query=urlencode(query)))
