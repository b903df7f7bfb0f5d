# realhouse_seo/storage/content_store.py

"""Read-only, in-memory content collections loaded from a JSON file."""

import json
import logging
from pathlib import Path
from typing import Any

from realhouse_seo.config.settings import Settings
from realhouse_seo.models.listing import BlogPost, Project, Property
from realhouse_seo.models.search_filter import PropertyFilter
from realhouse_seo.urls.slug_codec import (
    encode_project_path,
    normalize_path_segment,
    slugify,
)

logger = logging.getLogger("realhouse_seo.storage")


class ContentStoreError(Exception):
    """Raised when the content file is missing or malformed."""


class ContentStore:
    """Properties, projects and blog posts with simple lookups.

    Collections keep file order, which is the pool order used by the
    relevance engine for tie-breaking.
    """

    def __init__(
        self,
        properties: list[Property] | None = None,
        projects: list[Project] | None = None,
        posts: list[BlogPost] | None = None,
    ) -> None:
        self.properties: list[Property] = list(properties or [])
        self.projects: list[Project] = list(projects or [])
        self.posts: list[BlogPost] = list(posts or [])

    @classmethod
    def from_file(cls, path: Path | None = None) -> "ContentStore":
        """Load a store from a JSON file with ``properties``, ``projects``
        and ``posts`` arrays.

        Raises:
            ContentStoreError: if the file cannot be read or a record is
                missing required fields.
        """
        path = path or Settings.CONTENT_PATH
        try:
            with open(path, encoding="utf-8") as f:
                data: dict[str, Any] = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Cannot load content file {path}: {exc}"
            raise ContentStoreError(msg) from exc

        try:
            store = cls(
                properties=[
                    Property.from_dict(item)
                    for item in data.get("properties", [])
                ],
                projects=[
                    Project.from_dict(item)
                    for item in data.get("projects", [])
                ],
                posts=[
                    BlogPost.from_dict(item)
                    for item in data.get("posts", [])
                ],
            )
        except (KeyError, TypeError, AttributeError) as exc:
            msg = f"Malformed record in {path}: {exc!r}"
            raise ContentStoreError(msg) from exc

        logger.info(
            "Loaded %d properties, %d projects, %d posts from %s",
            len(store.properties),
            len(store.projects),
            len(store.posts),
            path,
        )
        return store

    # ── Lookups ──────────────────────────────────────────

    def get_property(self, property_id: str) -> Property | None:
        """Property by identifier.

        Falls back to a normalised comparison so that identifiers which
        went through path canonicalisation (case, underscores) still match.
        """
        for prop in self.properties:
            if prop.id == property_id:
                return prop
        wanted = normalize_path_segment(property_id)
        for prop in self.properties:
            if normalize_path_segment(prop.id) == wanted:
                return prop
        logger.debug("Property '%s' not found", property_id)
        return None

    def get_project(self, project_key: str) -> Project | None:
        """Project by identifier or by decoded name slug."""
        for project in self.projects:
            if project.id == project_key:
                return project
        for project in self.projects:
            if slugify(project.name) == project_key:
                return project
        logger.debug("Project '%s' not found", project_key)
        return None

    def get_project_by_path(self, path: str) -> Project | None:
        """Project whose encoded path equals *path* exactly."""
        for project in self.projects:
            if encode_project_path(project) == path:
                return project
        return None

    def get_post(self, slug: str) -> BlogPost | None:
        """Blog post by slug (or identifier)."""
        for post in self.posts:
            if post.slug == slug or post.id == slug:
                return post
        logger.debug("Post '%s' not found", slug)
        return None

    # ── Queries ──────────────────────────────────────────

    def filter_properties(self, search: PropertyFilter) -> list[Property]:
        """Properties matching every constraint set on *search*.

        String fields compare by slug, so ``villa`` matches ``Villa``.
        """
        return [prop for prop in self.properties if _matches(prop, search)]


def _same_slug(expected: str | None, actual: str) -> bool:
    if expected is None:
        return True
    wanted = slugify(expected)
    if not wanted or wanted == Settings.FILTER_SENTINEL:
        return True
    return wanted == slugify(actual)


def _in_range(value: float, low: float | None, high: float | None) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _matches(prop: Property, search: PropertyFilter) -> bool:
    location_text = f"{prop.location.district} {prop.location.city}"
    location_ok = (
        search.location is None
        or slugify(search.location) in slugify(location_text)
    )
    return (
        _same_slug(search.type, prop.type)
        and _same_slug(search.district, prop.location.district)
        and _same_slug(search.status, prop.status)
        and location_ok
        and _in_range(prop.price, search.min_price, search.max_price)
        and _in_range(prop.specs.beds, search.min_beds, search.max_beds)
        and _in_range(prop.specs.sqm, search.min_area, search.max_area)
    )
