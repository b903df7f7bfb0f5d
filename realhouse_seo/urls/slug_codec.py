# realhouse_seo/urls/slug_codec.py

"""Bidirectional mapping between content records and URL path segments.

Every function here is total: degenerate input produces a valid,
possibly low-quality string instead of raising, so page rendering is
never blocked by a bad title or identifier.

Path shapes:
    /properties/{type}-for-{status}-{district}-{city}-{id}
    /projects/{name}-{city}
    /blog/{slug}
"""

import logging
import re

from realhouse_seo.config.settings import Settings
from realhouse_seo.models.listing import BlogPost, Project, Property

logger = logging.getLogger("realhouse_seo.urls")

PROPERTIES_PREFIX = "/properties/"
PROJECTS_PREFIX = "/projects/"
BLOG_PREFIX = "/blog/"

# Status values with a short token in property paths
_STATUS_TOKENS: dict[str, str] = {
    "For Sale": "sale",
    "For Rent": "rent",
}

# ── Normalisation ────────────────────────────────────────

_SEPARATOR_RE = re.compile(r"[\s_]+")
_PATH_INVALID_RE = re.compile(r"[^a-z0-9\-/]")
_HYPHEN_RUN_RE = re.compile(r"-+")
_SLASH_RUN_RE = re.compile(r"/+")

_SLUG_INVALID_RE = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE_RUN_RE = re.compile(r"\s+")


def normalize_path_segment(text: str) -> str:
    """Normalise a URL path for SEO comparison and canonical output.

    Lowercases, turns whitespace/underscores into hyphens, strips
    anything outside ``[a-z0-9-/]``, collapses hyphen and slash runs,
    and drops a trailing slash. A path that empties out becomes ``/``.
    Idempotent.
    """
    normalized = text.lower()
    normalized = _SEPARATOR_RE.sub("-", normalized)
    normalized = _PATH_INVALID_RE.sub("", normalized)
    normalized = _HYPHEN_RUN_RE.sub("-", normalized)
    normalized = _SLASH_RUN_RE.sub("/", normalized)
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized or "/"


def normalize_url(url: str) -> tuple[str, str]:
    """Split *url* into a normalised path and its untouched query string."""
    path, _, query = url.partition("?")
    return normalize_path_segment(path), query


def slugify(text: str) -> str:
    """Generate a URL-safe slug from *text*.

    Returns an empty string for empty or punctuation-only input;
    callers fall back to an identifier in that case.
    """
    slug = text.strip().lower()
    slug = _SLUG_INVALID_RE.sub("", slug)
    slug = _WHITESPACE_RUN_RE.sub("-", slug)
    slug = _HYPHEN_RUN_RE.sub("-", slug)
    return slug.strip("-")


def _strip_prefix(path: str, prefix: str) -> str:
    """Remove a leading section prefix, tolerating a missing slash."""
    if path.startswith(prefix):
        return path[len(prefix):]
    if path.startswith(prefix.lstrip("/")):
        return path[len(prefix) - 1:]
    return path


# ── Properties ───────────────────────────────────────────


def property_status_token(status: str) -> str:
    """Short status token used between ``-for-`` and the location."""
    return _STATUS_TOKENS.get(status) or slugify(status)


def encode_property_path(prop: Property) -> str:
    """Build ``/properties/{type}-for-{status}-{location}-{id}``.

    The identifier is appended verbatim and is always the last token.
    """
    type_slug = slugify(prop.type)
    status_token = property_status_token(prop.status)
    location_slug = slugify(
        f"{prop.location.district} {prop.location.city}"
    )
    return (
        f"{PROPERTIES_PREFIX}{type_slug}-for-{status_token}"
        f"-{location_slug}-{prop.id}"
    )


def decode_property_path(path: str) -> str:
    """Recover a property identifier from its path.

    SEO paths are parsed at a fixed offset: the identifier is whatever
    follows ``{type}-for-{status}-{district}-{city}``. Anything without
    a ``for`` token is treated as a legacy bare-ID link and returned
    unchanged. Multi-word statuses, districts or cities shift the offset
    and yield a wrong identifier; that ambiguity is inherent to the path
    scheme.
    """
    remainder = _strip_prefix(path, PROPERTIES_PREFIX)

    parts = remainder.split("-")
    if "for" in parts:
        id_start = parts.index("for") + 4
        if len(parts) > id_start:
            return "-".join(parts[id_start:])

    return remainder


# ── Projects ─────────────────────────────────────────────


def encode_project_path(project: Project) -> str:
    """Build ``/projects/{name}-{city}``."""
    name_slug = slugify(project.name)
    if not name_slug:
        logger.debug(
            "Project %s has an empty name slug; using its id",
            project.id,
        )
        name_slug = project.id
    city_slug = slugify(project.location.city)
    if not city_slug:
        return f"{PROJECTS_PREFIX}{name_slug}"
    return f"{PROJECTS_PREFIX}{name_slug}-{city_slug}"


def decode_project_path(path: str, city: str | None = None) -> str:
    """Recover a project name slug by stripping the ``-{city}`` suffix.

    A project whose own slug ends in the city token loses that token;
    this is accepted lossy behaviour.
    """
    remainder = _strip_prefix(path, PROJECTS_PREFIX)
    city_slug = slugify(city if city is not None else Settings.DEFAULT_CITY)
    suffix = f"-{city_slug}"
    if city_slug and remainder.endswith(suffix) and remainder != suffix:
        return remainder[: -len(suffix)]
    return remainder


# ── Blog ─────────────────────────────────────────────────


def encode_blog_path(post: BlogPost) -> str:
    """Build ``/blog/{slug}`` from the stored, pre-normalised slug."""
    return f"{BLOG_PREFIX}{post.slug}"


def decode_blog_path(path: str) -> str:
    """Recover a blog slug from its path."""
    return _strip_prefix(path, BLOG_PREFIX)


# ── Other sections ───────────────────────────────────────


def area_path(district: str, city: str | None = None) -> str:
    """Build ``/areas/{district}-{city}-properties``."""
    city_slug = slugify(city if city is not None else Settings.DEFAULT_CITY)
    return f"/areas/{slugify(district)}-{city_slug}-properties"


def district_path(district: str) -> str:
    """Build ``/properties/{district}`` for a district landing page."""
    return f"{PROPERTIES_PREFIX}{slugify(district)}"


def service_path(name: str) -> str:
    """Build ``/services/{slug}``."""
    return f"/services/{slugify(name)}"


# ── Canonical URLs ───────────────────────────────────────


def _with_origin(path: str) -> str:
    """Join the site origin and a path with exactly one slash between."""
    origin = Settings.SITE_ORIGIN.rstrip("/")
    path = _SLASH_RUN_RE.sub("/", path)
    if path in ("", "/"):
        return origin
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{origin}{path}"


def absolute_url(path: str) -> str:
    """Prefix a site-relative path with the origin; absolute URLs pass through."""
    if path.startswith(("http://", "https://")):
        return path
    return _with_origin(path)


def canonical_url(path: str) -> str:
    """Canonical absolute URL for any page path (normalised).

    Only the path is normalised; a query string is carried over as is.
    """
    normalized, query = normalize_url(path)
    url = _with_origin(normalized)
    return f"{url}?{query}" if query else url


def property_canonical_url(prop: Property) -> str:
    """Canonical absolute URL for a property detail page."""
    return _with_origin(encode_property_path(prop))


def project_canonical_url(project: Project) -> str:
    """Canonical absolute URL for a project detail page."""
    return _with_origin(encode_project_path(project))


def blog_canonical_url(post: BlogPost) -> str:
    """Canonical absolute URL for a blog post."""
    return _with_origin(encode_blog_path(post))
