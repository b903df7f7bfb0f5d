# realhouse_seo/config/settings.py

"""Central configuration for the realhouse_seo routing engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the realhouse_seo routing engine."""

    # --- Site ---
    SITE_ORIGIN: str = os.getenv(
        "REALHOUSE_SITE_ORIGIN", "https://realhouseiq.com"
    )
    SITE_HOSTS: list[str] = ["realhouseiq.com", "www.realhouseiq.com"]
    DEFAULT_CITY: str = os.getenv("REALHOUSE_DEFAULT_CITY", "Erbil")

    # --- Locales (hreflang) ---
    DEFAULT_LOCALE: str = "en"
    LOCALES: list[str] = ["en", "ar", "ku"]

    # --- Filter codec ---
    PRICE_RANGE_CEILING: int = 1_000_000  # Above this, ranges collapse to "under-"
    FILTER_SENTINEL: str = "all"

    # --- Relevance scoring ---
    RELATED_PROPERTIES_LIMIT: int = 4
    RELATED_PROJECTS_LIMIT: int = 3
    SIMILAR_POSTS_LIMIT: int = 4
    POST_PROPERTIES_LIMIT: int = 3
    POST_PROJECTS_LIMIT: int = 2
    CROSS_LINK_LIMIT: int = 3
    PROJECT_PROPERTIES_LIMIT: int = 4
    DISTRICT_LINKS_LIMIT: int = 8
    PRICE_GATE_RATIO: float = 0.3       # Related-property eligibility
    PRICE_SCORE_RATIO: float = 0.2      # Related-property +1 band
    LUXURY_PRICE_THRESHOLD: int = 400_000

    # --- Breadcrumbs / SEO ---
    BREADCRUMB_TITLE_MAX: int = 50
    SEO_PATH_MAX_LENGTH: int = 75

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CONTENT_PATH: Path = BASE_DIR / "data" / "content.json"
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Static pages (sitemap, breadcrumbs) ---
    STATIC_PAGES: list[dict[str, str]] = [
        {"id": "home", "path": "/", "label": "Home"},
        {"id": "properties", "path": "/properties", "label": "Properties for Sale & Rent"},
        {"id": "projects", "path": "/projects", "label": "Development Projects in Erbil"},
        {"id": "blog", "path": "/blog", "label": "Real Estate Blog & Insights"},
        {"id": "about", "path": "/about", "label": "About Real House"},
        {"id": "contact", "path": "/contact", "label": "Contact Us"},
        {"id": "faq", "path": "/faq", "label": "Frequently Asked Questions"},
        {"id": "services", "path": "/services", "label": "Our Services"},
        {"id": "locations", "path": "/locations", "label": "Locations"},
        {"id": "buy", "path": "/buy", "label": "Properties for Sale in Erbil"},
        {"id": "rent", "path": "/rent", "label": "Properties for Rent in Erbil"},
        {"id": "invest", "path": "/invest", "label": "Investment Properties in Erbil"},
        {"id": "luxury", "path": "/luxury", "label": "Luxury Properties in Erbil"},
        {"id": "sitemap", "path": "/sitemap", "label": "Sitemap"},
        {"id": "privacy", "path": "/privacy", "label": "Privacy Policy"},
        {"id": "terms", "path": "/terms", "label": "Terms of Service"},
    ]
