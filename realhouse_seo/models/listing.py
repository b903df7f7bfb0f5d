# realhouse_seo/models/listing.py

"""Content record models consumed read-only by the routing engine."""

from dataclasses import dataclass, field
from typing import Any

PROPERTY_TYPES: tuple[str, ...] = (
    "Apartment",
    "Villa",
    "Penthouse",
    "Townhouse",
    "Duplex",
    "Commercial",
    "Land",
)
PROPERTY_STATUSES: tuple[str, ...] = ("For Sale", "For Rent", "Off Plan")
PROJECT_STATUSES: tuple[str, ...] = (
    "Under Construction",
    "Ready",
    "Coming Soon",
)
BLOG_CATEGORIES: tuple[str, ...] = (
    "Market Trends",
    "Buying Guide",
    "Neighborhoods",
    "Investment",
    "Lifestyle",
    "News",
)


@dataclass
class Location:
    """District and city of a property or project."""

    district: str
    city: str


@dataclass
class PropertySpecs:
    """Physical specification of a property."""

    beds: int = 0
    baths: int = 0
    sqm: float = 0.0


@dataclass
class PriceRange:
    """Unit price bounds for a development project."""

    min: float = 0.0
    max: float = 0.0


@dataclass
class Property:
    """A single property listing. A price of 0 means "contact for price"."""

    id: str
    title: str
    type: str
    status: str
    price: float
    location: Location
    specs: PropertySpecs = field(default_factory=PropertySpecs)
    badges: frozenset[str] = frozenset()
    is_featured: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Property":
        """Build a Property from a fixture/API dict (camelCase keys)."""
        specs = data.get("specs", {})
        return cls(
            id=str(data["id"]),
            title=data["title"],
            type=data["type"],
            status=data["status"],
            price=data.get("price", 0),
            location=Location(
                district=data["location"]["district"],
                city=data["location"]["city"],
            ),
            specs=PropertySpecs(
                beds=specs.get("beds", 0),
                baths=specs.get("baths", 0),
                sqm=specs.get("sqm", 0.0),
            ),
            badges=frozenset(data.get("badges", ())),
            is_featured=bool(data.get("isFeatured", False)),
        )


@dataclass
class Project:
    """A development project."""

    id: str
    name: str
    status: str
    location: Location
    price_range: PriceRange = field(default_factory=PriceRange)
    total_units: int = 0
    available_units: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Build a Project from a fixture/API dict (camelCase keys)."""
        price_range = data.get("priceRange", {})
        return cls(
            id=str(data["id"]),
            name=data["name"],
            status=data["status"],
            location=Location(
                district=data["location"]["district"],
                city=data["location"]["city"],
            ),
            price_range=PriceRange(
                min=price_range.get("min", 0.0),
                max=price_range.get("max", 0.0),
            ),
            total_units=data.get("totalUnits", 0),
            available_units=data.get("availableUnits", 0),
        )


@dataclass
class BlogPost:
    """A blog article. ``slug`` is stored already normalised."""

    id: str
    slug: str
    title: str
    category: str
    tags: tuple[str, ...] = ()
    excerpt: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BlogPost":
        """Build a BlogPost from a fixture/API dict."""
        return cls(
            id=str(data["id"]),
            slug=data["slug"],
            title=data["title"],
            category=data["category"],
            tags=tuple(data.get("tags", ())),
            excerpt=data.get("excerpt", ""),
        )
