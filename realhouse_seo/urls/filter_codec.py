# realhouse_seo/urls/filter_codec.py

"""Compact, human-readable query strings for property search filters.

Encoding is lossy but conventional: prices travel in truncated
thousands (``price=100k-300k``, ``price=under-450k``,
``price=above-200k``), bedrooms as a lower bound (``beds=3+``) and
area as a closed range (``area=80-150sqm``). After one encode the
value is stable: ``encode(decode(encode(f))) == encode(f)``.

Decoding never raises; a value that does not match its pattern is
ignored and the field stays ``None``.
"""

import logging
import math
import re
from urllib.parse import parse_qs, urlencode

from realhouse_seo.config.settings import Settings
from realhouse_seo.models.search_filter import PropertyFilter
from realhouse_seo.urls.slug_codec import slugify

logger = logging.getLogger("realhouse_seo.filters")

LISTING_PATH = "/properties"

# Status slugs with a fixed display form
_STATUS_DISPLAY: dict[str, str] = {
    "for-sale": "For Sale",
    "for-rent": "For Rent",
    "off-plan": "Off Plan",
}

_PRICE_UNDER_RE = re.compile(r"under-(\d+)k")
_PRICE_ABOVE_RE = re.compile(r"above-(\d+)k")
_PRICE_RANGE_RE = re.compile(r"(\d+)k-(\d+)k")
_BEDS_RE = re.compile(r"(\d+)\+?")
_AREA_RE = re.compile(r"(\d+(?:\.\d+)?)-(\d+(?:\.\d+)?)sqm")
_DECIMAL_RE = re.compile(r"\d+\.\d+")


# ── Encoding helpers ─────────────────────────────────────


def _slug_value(value: str | None) -> str | None:
    """Slug for a string field, or None when absent/sentinel/empty."""
    if value is None:
        return None
    slug = slugify(value)
    if not slug or slug == Settings.FILTER_SENTINEL:
        return None
    return slug


def _bound(value: float | None) -> float | None:
    """Accept a numeric bound only when it is finite and non-negative."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        logger.debug("Ignoring non-finite filter bound %r", value)
        return None
    if value < 0:
        logger.debug("Ignoring out-of-range filter bound %r", value)
        return None
    return value


def _thousands(value: float) -> int:
    """Integer-truncated thousands, as used by the price token."""
    return int(value // 1000)


def _format_number(value: float) -> str | None:
    """Plain decimal text for an area bound, or None if unrepresentable."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = repr(float(value))
    if _DECIMAL_RE.fullmatch(text):
        return text
    return None


def _encode_price(
    min_price: float | None, max_price: float | None
) -> str | None:
    """Pick exactly one of the range / under / above price forms."""
    if min_price is not None and max_price is not None:
        if max_price < Settings.PRICE_RANGE_CEILING:
            return f"{_thousands(min_price)}k-{_thousands(max_price)}k"
        return f"under-{_thousands(max_price)}k"
    if max_price is not None:
        return f"under-{_thousands(max_price)}k"
    if min_price is not None:
        return f"above-{_thousands(min_price)}k"
    return None


def _encode_area(
    min_area: float | None, max_area: float | None
) -> str | None:
    if min_area is None or max_area is None:
        return None
    low = _format_number(min_area)
    high = _format_number(max_area)
    if low is None or high is None:
        return None
    return f"{low}-{high}sqm"


# ── Public API: encode ───────────────────────────────────


def encode_filter(search: PropertyFilter) -> str:
    """Encode *search* as a query string (without a leading ``?``).

    Keys are emitted in a fixed order: type, location, district,
    status, price, beds, area. Absent fields and the ``All`` sentinel
    produce no key at all.
    """
    params: list[tuple[str, str]] = []

    for key in ("type", "location", "district", "status"):
        slug = _slug_value(getattr(search, key))
        if slug is not None:
            params.append((key, slug))

    price = _encode_price(
        _bound(search.min_price), _bound(search.max_price)
    )
    if price is not None:
        params.append(("price", price))

    min_beds = _bound(search.min_beds)
    if min_beds is not None and int(min_beds) > 0:
        params.append(("beds", f"{int(min_beds)}+"))

    area = _encode_area(_bound(search.min_area), _bound(search.max_area))
    if area is not None:
        params.append(("area", area))

    return urlencode(params)


def generate_filter_url(search: PropertyFilter) -> str:
    """Listing URL for *search*: ``/properties`` plus any query string."""
    query = encode_filter(search)
    return f"{LISTING_PATH}?{query}" if query else LISTING_PATH


# ── Decoding helpers ─────────────────────────────────────


def _title_words(slug: str) -> str:
    """``gulan-street`` → ``Gulan Street``."""
    return " ".join(
        word[:1].upper() + word[1:] for word in slug.split("-")
    )


def _decode_status(slug: str) -> str:
    return _STATUS_DISPLAY.get(slug) or _title_words(slug)


def _number(text: str) -> int | float:
    """Parse a decoded decimal, keeping whole numbers as int."""
    return float(text) if "." in text else int(text)


def _decode_price(value: str, search: PropertyFilter) -> None:
    under = _PRICE_UNDER_RE.fullmatch(value)
    above = _PRICE_ABOVE_RE.fullmatch(value)
    price_range = _PRICE_RANGE_RE.fullmatch(value)
    if under:
        search.max_price = int(under.group(1)) * 1000
    elif above:
        search.min_price = int(above.group(1)) * 1000
    elif price_range:
        search.min_price = int(price_range.group(1)) * 1000
        search.max_price = int(price_range.group(2)) * 1000
    else:
        logger.debug("Ignoring unparseable price value '%s'", value)


def _query_part(raw: str) -> str:
    """Isolate the query portion of a bare query, ``?query`` or path."""
    if "?" in raw:
        raw = raw.split("?", 1)[1]
    return raw.split("#", 1)[0]


# ── Public API: decode ───────────────────────────────────


def parse_filter_params(query: str) -> PropertyFilter:
    """Decode a query string into a :class:`PropertyFilter`.

    Accepts ``type=villa&price=under-450k``, the same with a leading
    ``?``, or a full ``/properties?...`` path. Unknown keys and
    malformed values are ignored.
    """
    values = {
        key: items[0].strip()
        for key, items in parse_qs(_query_part(query)).items()
        if items and items[0].strip()
    }
    search = PropertyFilter()

    if "type" in values:
        raw_type = values["type"]
        search.type = raw_type[:1].upper() + raw_type[1:]

    if "location" in values:
        search.location = values["location"]

    if "district" in values:
        search.district = _title_words(values["district"])

    if "status" in values:
        search.status = _decode_status(values["status"])

    if "price" in values:
        _decode_price(values["price"], search)

    if "beds" in values:
        beds = _BEDS_RE.fullmatch(values["beds"])
        if beds:
            search.min_beds = int(beds.group(1))
        else:
            logger.debug("Ignoring unparseable beds value '%s'", values["beds"])

    if "area" in values:
        area = _AREA_RE.fullmatch(values["area"])
        if area:
            search.min_area = _number(area.group(1))
            search.max_area = _number(area.group(2))
        else:
            logger.debug("Ignoring unparseable area value '%s'", values["area"])

    return search
