# realhouse_seo/services/page_router.py

"""Resolves an inbound request path into everything a page needs.

Order of work for one request:

1. redirect check (legacy prefixes, case, trailing slash, bad chars);
2. path decoding into a content identifier;
3. record lookup in the content store;
4. related content and breadcrumbs for detail pages, or filter
   decoding and matching listings for the listing page.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from realhouse_seo.config.settings import Settings
from realhouse_seo.linking import breadcrumbs, relevance
from realhouse_seo.models.breadcrumb import BreadcrumbItem
from realhouse_seo.models.listing import BlogPost, Project, Property
from realhouse_seo.models.search_filter import PropertyFilter
from realhouse_seo.storage.content_store import ContentStore
from realhouse_seo.urls.filter_codec import (
    LISTING_PATH,
    generate_filter_url,
    parse_filter_params,
)
from realhouse_seo.urls.redirect_resolver import explain_redirect
from realhouse_seo.urls.slug_codec import (
    BLOG_PREFIX,
    PROJECTS_PREFIX,
    PROPERTIES_PREFIX,
    absolute_url,
    blog_canonical_url,
    canonical_url,
    decode_blog_path,
    decode_project_path,
    decode_property_path,
    project_canonical_url,
    property_canonical_url,
    slugify,
)

logger = logging.getLogger("realhouse_seo.router")

Record = Property | Project | BlogPost


@dataclass
class RouteResult:
    """Everything resolved for one request path."""

    path: str
    kind: str  # "redirect", "property", "project", "blog", "listing", "static", "not_found"
    status: int = 200
    redirect_to: str | None = None
    redirect_rule: str | None = None
    identifier: str | None = None
    record: Record | None = None
    search: PropertyFilter | None = None
    listings: list[Property] = field(
        default_factory=lambda: list[Property]()
    )
    related: dict[str, list[Any]] = field(
        default_factory=lambda: dict[str, list[Any]]()
    )
    breadcrumbs: list[BreadcrumbItem] = field(
        default_factory=lambda: list[BreadcrumbItem]()
    )
    canonical_url: str | None = None

    @property
    def not_found(self) -> bool:
        return self.status == 404


class PageRouter:
    """Route request paths against a :class:`ContentStore`."""

    def __init__(self, store: ContentStore) -> None:
        self.store = store
        self._static_paths: dict[str, str] = {
            page["path"]: page["id"] for page in Settings.STATIC_PAGES
        }

    # ── Public API ───────────────────────────────────────

    def route(self, path: str, query: str = "") -> RouteResult:
        """Resolve *path* (optionally with *query*) into a RouteResult.

        A query string inside *path* is merged ahead of *query*.
        """
        path, _, inline_query = path.partition("?")
        query = "&".join(q for q in (inline_query, query) if q)
        url = f"{path}?{query}" if query else path

        decision = explain_redirect(url)
        if decision is not None:
            logger.info(
                "Redirecting %s → %s (%s)",
                url,
                decision.target,
                decision.rule,
            )
            return RouteResult(
                path=url,
                kind="redirect",
                status=301,
                redirect_to=decision.target,
                redirect_rule=decision.rule,
            )

        if path == LISTING_PATH:
            return self._route_listing(path, query)
        if path.startswith(PROPERTIES_PREFIX):
            return self._route_property(path)
        if path.startswith(PROJECTS_PREFIX):
            return self._route_project(path)
        if path.startswith(BLOG_PREFIX):
            return self._route_post(path)
        if path in self._static_paths:
            page_id = self._static_paths[path]
            return RouteResult(
                path=path,
                kind="static",
                identifier=page_id,
                breadcrumbs=breadcrumbs.static_trail(page_id),
                canonical_url=canonical_url(path),
            )

        return self._not_found(path)

    # ── Page kinds ───────────────────────────────────────

    def _route_listing(
        self, path: str, query: str, search: PropertyFilter | None = None
    ) -> RouteResult:
        search = search or parse_filter_params(query)
        listings = self.store.filter_properties(search)
        logger.debug(
            "Listing %s matched %d properties", query or "(all)", len(listings)
        )
        return RouteResult(
            path=path,
            kind="listing",
            search=search,
            listings=listings,
            breadcrumbs=breadcrumbs.static_trail("properties"),
            canonical_url=absolute_url(generate_filter_url(search)),
        )

    def _route_property(self, path: str) -> RouteResult:
        property_id = decode_property_path(path)
        prop = self.store.get_property(property_id)
        if prop is None:
            district = self._district_for_slug(property_id)
            if district is not None:
                return self._route_listing(
                    path, "", PropertyFilter(district=district)
                )
            return self._not_found(path, identifier=property_id)

        project = relevance.project_for_property(prop, self.store.projects)
        return RouteResult(
            path=path,
            kind="property",
            identifier=property_id,
            record=prop,
            related={
                "properties": relevance.related_properties(
                    prop, self.store.properties
                ),
                "projects": [project] if project is not None else [],
                "posts": relevance.blog_posts_for_property(
                    prop, self.store.posts
                ),
            },
            breadcrumbs=breadcrumbs.property_detail_trail(prop),
            canonical_url=property_canonical_url(prop),
        )

    def _route_project(self, path: str) -> RouteResult:
        project_key = decode_project_path(path)
        project = self.store.get_project_by_path(
            path
        ) or self.store.get_project(project_key)
        if project is None:
            return self._not_found(path, identifier=project_key)

        return RouteResult(
            path=path,
            kind="project",
            identifier=project.id,
            record=project,
            related={
                "projects": relevance.related_projects(
                    project, self.store.projects
                ),
                "properties": relevance.properties_in_project(
                    project, self.store.properties
                ),
                "posts": relevance.blog_posts_for_project(
                    project, self.store.posts
                ),
            },
            breadcrumbs=breadcrumbs.project_detail_trail(project),
            canonical_url=project_canonical_url(project),
        )

    def _route_post(self, path: str) -> RouteResult:
        slug = decode_blog_path(path)
        post = self.store.get_post(slug)
        if post is None:
            return self._not_found(path, identifier=slug)

        return RouteResult(
            path=path,
            kind="blog",
            identifier=slug,
            record=post,
            related={
                "posts": relevance.similar_posts(post, self.store.posts),
                "properties": relevance.relevant_properties_for_post(
                    post, self.store.properties
                ),
                "projects": relevance.relevant_projects_for_post(
                    post, self.store.projects
                ),
            },
            breadcrumbs=breadcrumbs.blog_post_trail(post),
            canonical_url=blog_canonical_url(post),
        )

    # ── Helpers ──────────────────────────────────────────

    def _district_for_slug(self, slug: str) -> str | None:
        """District whose slug equals *slug* (district landing pages)."""
        for prop in self.store.properties:
            if slugify(prop.location.district) == slug:
                return prop.location.district
        return None

    def _not_found(
        self, path: str, identifier: str | None = None
    ) -> RouteResult:
        logger.info("No content for %s", path)
        return RouteResult(
            path=path,
            kind="not_found",
            status=404,
            identifier=identifier,
            breadcrumbs=breadcrumbs.trail_from_path(path),
        )
