# realhouse_seo/models/breadcrumb.py

"""Breadcrumb trail models."""

from dataclasses import dataclass


@dataclass
class BreadcrumbItem:
    """One step of a navigation trail, with a site-relative URL."""

    name: str
    url: str
    current: bool = False


@dataclass
class RenderedCrumb:
    """A breadcrumb ready for display.

    ``href`` is ``None`` for the current page; ``schema_url`` always
    carries the absolute URL used in structured data.
    """

    position: int
    name: str
    href: str | None
    schema_url: str
    current: bool = False
