# realhouse_seo/linking/breadcrumbs.py

"""Breadcrumb trails and schema.org ``BreadcrumbList`` structured data.

A trail is an ordered list of :class:`BreadcrumbItem` with site-relative
URLs. The last item is the current page: it is rendered without a link
and flagged ``current``. Output depends only on the input, so repeated
calls produce identical markup.
"""

import json
import logging
from dataclasses import replace
from typing import Any
from urllib.parse import quote

from realhouse_seo.config.settings import Settings
from realhouse_seo.models.breadcrumb import BreadcrumbItem, RenderedCrumb
from realhouse_seo.models.listing import BlogPost, Project, Property
from realhouse_seo.models.search_filter import PropertyFilter
from realhouse_seo.urls.filter_codec import generate_filter_url
from realhouse_seo.urls.slug_codec import (
    absolute_url,
    encode_blog_path,
    encode_project_path,
    encode_property_path,
)

logger = logging.getLogger("realhouse_seo.breadcrumbs")

SCHEMA_CONTEXT = "https://schema.org"
SEPARATOR = "›"
HOME = BreadcrumbItem(name="Home", url="/")


# ── Trail construction ───────────────────────────────────


def build_trail(items: list[BreadcrumbItem]) -> list[BreadcrumbItem]:
    """Copy *items*, marking only the final entry as current."""
    last = len(items) - 1
    return [
        replace(item, current=index == last)
        for index, item in enumerate(items)
    ]


def _segment_name(segment: str) -> str:
    """``gulan-towers`` → ``Gulan Towers``."""
    return " ".join(
        word[:1].upper() + word[1:] for word in segment.split("-")
    )


def trail_from_path(path: str) -> list[BreadcrumbItem]:
    """Derive a trail from a raw path, with a leading Home entry.

    Each non-empty segment becomes a title-cased crumb pointing at the
    accumulated path prefix. The query string, if any, is ignored.
    """
    bare_path = path.split("?", 1)[0]
    items = [HOME]
    current = ""
    for segment in (s for s in bare_path.split("/") if s):
        current += f"/{segment}"
        items.append(BreadcrumbItem(name=_segment_name(segment), url=current))
    return build_trail(items)


# ── Structured data ──────────────────────────────────────


def breadcrumb_schema(items: list[BreadcrumbItem]) -> dict[str, Any]:
    """schema.org ``BreadcrumbList`` node for *items* (1-indexed)."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": index,
                "name": item.name,
                "item": absolute_url(item.url),
            }
            for index, item in enumerate(items, 1)
        ],
    }


def breadcrumb_json_ld(items: list[BreadcrumbItem]) -> str:
    """Serialised JSON-LD for a ``<script type="application/ld+json">``."""
    return json.dumps(breadcrumb_schema(items), ensure_ascii=False)


# ── Visual trail ─────────────────────────────────────────


def render_trail(items: list[BreadcrumbItem]) -> list[RenderedCrumb]:
    """Display structure: links for ancestors, plain text for the last."""
    trail = build_trail(items)
    return [
        RenderedCrumb(
            position=index,
            name=item.name,
            href=None if item.current else item.url,
            schema_url=absolute_url(item.url),
            current=item.current,
        )
        for index, item in enumerate(trail, 1)
    ]


def render_text(items: list[BreadcrumbItem]) -> str:
    """Plain-text trail, e.g. ``Home › Properties › Villa``."""
    return f" {SEPARATOR} ".join(item.name for item in items)


# ── Page trails ──────────────────────────────────────────


def _truncate(title: str) -> str:
    limit = Settings.BREADCRUMB_TITLE_MAX
    return f"{title[:limit]}..." if len(title) > limit else title


def property_detail_trail(prop: Property) -> list[BreadcrumbItem]:
    """Home › Properties › {Type}s in {District} › {Title}."""
    return build_trail(
        [
            HOME,
            BreadcrumbItem(name="Properties", url="/properties"),
            BreadcrumbItem(
                name=f"{prop.type}s in {prop.location.district}",
                url=generate_filter_url(PropertyFilter(type=prop.type)),
            ),
            BreadcrumbItem(name=prop.title, url=encode_property_path(prop)),
        ]
    )


def project_detail_trail(project: Project) -> list[BreadcrumbItem]:
    """Home › Projects › {Name}."""
    return build_trail(
        [
            HOME,
            BreadcrumbItem(name="Projects", url="/projects"),
            BreadcrumbItem(name=project.name, url=encode_project_path(project)),
        ]
    )


def blog_post_trail(post: BlogPost) -> list[BreadcrumbItem]:
    """Home › Blog › {Category} › {Title, truncated}."""
    return build_trail(
        [
            HOME,
            BreadcrumbItem(name="Blog", url="/blog"),
            BreadcrumbItem(
                name=post.category,
                url=f"/blog?category={quote(post.category)}",
            ),
            BreadcrumbItem(name=_truncate(post.title), url=encode_blog_path(post)),
        ]
    )


def static_trail(page_id: str) -> list[BreadcrumbItem]:
    """Trail for a registered static page; unknown pages get Home only."""
    for page in Settings.STATIC_PAGES:
        if page["id"] != page_id:
            continue
        if page["path"] == "/":
            return build_trail([HOME])
        return build_trail(
            [HOME, BreadcrumbItem(name=page["label"], url=page["path"])]
        )
    logger.debug("No static trail registered for page '%s'", page_id)
    return build_trail([HOME])
