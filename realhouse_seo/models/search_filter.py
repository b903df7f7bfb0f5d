# realhouse_seo/models/search_filter.py

"""Structured property-search filter model."""

from dataclasses import dataclass, fields


@dataclass
class PropertyFilter:
    """Optional search constraints for a property listing page.

    Every field is optional; a field left as ``None`` places no
    constraint on the search and is omitted from encoded query strings.
    """

    type: str | None = None
    location: str | None = None
    district: str | None = None
    status: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_beds: int | None = None
    max_beds: int | None = None
    min_area: float | None = None
    max_area: float | None = None

    def is_empty(self) -> bool:
        """Return True when no field constrains the search."""
        return all(getattr(self, f.name) is None for f in fields(self))
