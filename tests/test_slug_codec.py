# tests/test_slug_codec.py

"""Tests for path normalisation, slugs, and record path encode/decode."""

import unittest
from unittest.mock import patch

from realhouse_seo.config.settings import Settings
from realhouse_seo.models.listing import BlogPost, Location, Project, Property
from realhouse_seo.urls.slug_codec import (
    absolute_url,
    area_path,
    blog_canonical_url,
    canonical_url,
    decode_blog_path,
    decode_project_path,
    decode_property_path,
    district_path,
    encode_blog_path,
    encode_project_path,
    encode_property_path,
    normalize_path_segment,
    normalize_url,
    project_canonical_url,
    property_canonical_url,
    service_path,
    slugify,
)


def _prop(
    prop_id: str = "v-101",
    type_: str = "Villa",
    status: str = "For Sale",
    district: str = "Gulan",
    city: str = "Erbil",
) -> Property:
    """Create a minimal Property."""
    return Property(
        id=prop_id,
        title="Test listing",
        type=type_,
        status=status,
        price=300000,
        location=Location(district=district, city=city),
    )


def _project(
    name: str = "Empire World", project_id: str = "empire-world"
) -> Project:
    return Project(
        id=project_id,
        name=name,
        status="Under Construction",
        location=Location(district="Empire", city="Erbil"),
    )


# ── Normalisation ────────────────────────────────────────


class TestNormalizePathSegment(unittest.TestCase):
    """normalize_path_segment behaviour."""

    def test_mixed_defects(self) -> None:
        """Case, double slash, underscore and trailing slash are fixed."""
        self.assertEqual(
            normalize_path_segment("/Properties//Gulan_Towers/"),
            "/properties/gulan-towers",
        )

    def test_root_preserved(self) -> None:
        """The root path stays '/'."""
        self.assertEqual(normalize_path_segment("/"), "/")

    def test_empty_becomes_root(self) -> None:
        """Input that empties out becomes the root path."""
        self.assertEqual(normalize_path_segment(""), "/")
        self.assertEqual(normalize_path_segment("!!!"), "/")

    def test_whitespace_runs_become_one_hyphen(self) -> None:
        """Spaces and underscores collapse into a single hyphen."""
        self.assertEqual(
            normalize_path_segment("/blog/Erbil  _ Guide"),
            "/blog/erbil-guide",
        )

    def test_strips_disallowed_characters(self) -> None:
        """Characters outside [a-z0-9-/] are removed."""
        self.assertEqual(
            normalize_path_segment("/villa?x=1&y=é"), "/villax1y"
        )

    def test_idempotent(self) -> None:
        """A second pass never changes the output."""
        samples = [
            "",
            "/",
            "//",
            "/Properties//Gulan_Towers/",
            "a//b//",
            "/a/-/b/",
            "  Mixed CASE __ path  ",
            "/Ünïcode Päth/",
            "---",
            "/x--é--y/",
            "///__///",
        ]
        for text in samples:
            with self.subTest(text=text):
                once = normalize_path_segment(text)
                self.assertEqual(normalize_path_segment(once), once)

    def test_normalize_url_splits_query(self) -> None:
        """normalize_url cleans the path and returns the query verbatim."""
        self.assertEqual(
            normalize_url("/Blog//News/?page=2&Sort=New"),
            ("/blog/news", "page=2&Sort=New"),
        )
        self.assertEqual(normalize_url("/Blog/"), ("/blog", ""))


class TestSlugify(unittest.TestCase):
    """slugify behaviour."""

    def test_basic(self) -> None:
        """Words are lower-cased and hyphen-joined."""
        self.assertEqual(slugify("Empire World 2"), "empire-world-2")

    def test_punctuation_removed(self) -> None:
        """Punctuation is dropped before hyphenation."""
        self.assertEqual(slugify("Gulan Towers!"), "gulan-towers")

    def test_hyphen_runs_and_edges(self) -> None:
        """Hyphen runs collapse and edge hyphens are stripped."""
        self.assertEqual(
            slugify("  --Hello--  World--  "), "hello-world"
        )

    def test_punctuation_only_is_empty(self) -> None:
        """All-punctuation input yields an empty slug, not an error."""
        self.assertEqual(slugify("!!!"), "")
        self.assertEqual(slugify(""), "")

    def test_non_ascii_letters_removed(self) -> None:
        """Only ASCII word characters survive."""
        self.assertEqual(slugify("Café Erbil"), "caf-erbil")


# ── Properties ───────────────────────────────────────────


class TestPropertyPaths(unittest.TestCase):
    """encode_property_path / decode_property_path."""

    def test_encode_sale(self) -> None:
        """For Sale uses the short 'sale' token."""
        self.assertEqual(
            encode_property_path(_prop()),
            "/properties/villa-for-sale-gulan-erbil-v-101",
        )

    def test_encode_rent(self) -> None:
        """For Rent uses the short 'rent' token."""
        prop = _prop("a-202", "Apartment", "For Rent", "Ankawa")
        self.assertEqual(
            encode_property_path(prop),
            "/properties/apartment-for-rent-ankawa-erbil-a-202",
        )

    def test_encode_other_status_slugified(self) -> None:
        """Other statuses are slugified in full."""
        prop = _prop("p-404", "Penthouse", "Off Plan", "Empire")
        self.assertEqual(
            encode_property_path(prop),
            "/properties/penthouse-for-off-plan-empire-erbil-p-404",
        )

    def test_identifier_not_slugified(self) -> None:
        """The identifier is appended verbatim."""
        path = encode_property_path(_prop("ABC_12"))
        self.assertTrue(path.endswith("-ABC_12"))
        self.assertEqual(decode_property_path(path), "ABC_12")

    def test_decode(self) -> None:
        """The identifier follows the four leading tokens."""
        self.assertEqual(
            decode_property_path(
                "/properties/villa-for-sale-gulan-erbil-v-101"
            ),
            "v-101",
        )

    def test_round_trip(self) -> None:
        """Single-word fields decode back to the identifier."""
        props = [
            _prop("v-101"),
            _prop("42", "Land", "For Sale", "Pirmam"),
            _prop("a-b-c", "Duplex", "For Rent", "Ankawa"),
            _prop("for-7"),
        ]
        for prop in props:
            with self.subTest(prop_id=prop.id):
                self.assertEqual(
                    decode_property_path(encode_property_path(prop)),
                    prop.id,
                )

    def test_bare_identifier_passthrough(self) -> None:
        """Paths without a 'for' token are legacy bare-ID links."""
        self.assertEqual(decode_property_path("/properties/v-101"), "v-101")

    def test_too_short_returns_remainder(self) -> None:
        """A 'for' path with no identifier returns the remainder."""
        self.assertEqual(
            decode_property_path("/properties/villa-for-sale"),
            "villa-for-sale",
        )

    def test_known_limitation_multi_word_status(self) -> None:
        """Off Plan adds a token, so the fixed offset eats the city."""
        path = encode_property_path(
            _prop("p-404", "Penthouse", "Off Plan", "Empire")
        )
        self.assertEqual(decode_property_path(path), "erbil-p-404")

    def test_known_limitation_multi_word_district(self) -> None:
        """A two-word district shifts the identifier offset."""
        path = encode_property_path(_prop("x1", district="Dream City"))
        self.assertEqual(decode_property_path(path), "erbil-x1")


# ── Projects and blog ────────────────────────────────────


class TestProjectPaths(unittest.TestCase):
    """encode_project_path / decode_project_path."""

    def test_encode(self) -> None:
        """Name slug followed by city slug."""
        self.assertEqual(
            encode_project_path(_project()), "/projects/empire-world-erbil"
        )

    def test_decode_strips_city(self) -> None:
        """The default city suffix is removed."""
        self.assertEqual(
            decode_project_path("/projects/empire-world-erbil"),
            "empire-world",
        )

    def test_decode_without_suffix(self) -> None:
        """Paths without the city suffix come back unchanged."""
        self.assertEqual(
            decode_project_path("/projects/empire-world"), "empire-world"
        )

    def test_decode_explicit_city(self) -> None:
        """An explicit city overrides the configured default."""
        self.assertEqual(
            decode_project_path(
                "/projects/tower-sulaymaniyah", city="Sulaymaniyah"
            ),
            "tower",
        )

    def test_decode_follows_default_city_setting(self) -> None:
        """DEFAULT_CITY controls the stripped suffix."""
        with patch.object(Settings, "DEFAULT_CITY", "Duhok"):
            self.assertEqual(
                decode_project_path("/projects/garden-duhok"), "garden"
            )

    def test_empty_name_falls_back_to_id(self) -> None:
        """A punctuation-only name uses the project id."""
        self.assertEqual(
            encode_project_path(_project(name="!!!", project_id="p-9")),
            "/projects/p-9-erbil",
        )


class TestBlogPaths(unittest.TestCase):
    """encode_blog_path / decode_blog_path."""

    def test_encode_uses_stored_slug(self) -> None:
        """The stored slug is passed through."""
        post = BlogPost(
            id="post-5",
            slug="living-in-gulan",
            title="Living in Gulan",
            category="Neighborhoods",
        )
        self.assertEqual(encode_blog_path(post), "/blog/living-in-gulan")

    def test_decode(self) -> None:
        """The /blog/ prefix is removed."""
        self.assertEqual(
            decode_blog_path("/blog/living-in-gulan"), "living-in-gulan"
        )


class TestSectionPaths(unittest.TestCase):
    """area_path, district_path, service_path."""

    def test_area_path(self) -> None:
        self.assertEqual(area_path("Gulan"), "/areas/gulan-erbil-properties")

    def test_district_path(self) -> None:
        self.assertEqual(
            district_path("Italian Village"), "/properties/italian-village"
        )

    def test_service_path(self) -> None:
        self.assertEqual(
            service_path("Property Management"),
            "/services/property-management",
        )


# ── Canonical URLs ───────────────────────────────────────


class TestCanonicalUrls(unittest.TestCase):
    """Absolute URL builders never duplicate slashes."""

    def test_property_canonical(self) -> None:
        self.assertEqual(
            property_canonical_url(_prop()),
            "https://realhouseiq.com/properties/villa-for-sale-gulan-erbil-v-101",
        )

    def test_project_canonical(self) -> None:
        self.assertEqual(
            project_canonical_url(_project()),
            "https://realhouseiq.com/projects/empire-world-erbil",
        )

    def test_blog_canonical(self) -> None:
        post = BlogPost(id="1", slug="news", title="News", category="News")
        self.assertEqual(
            blog_canonical_url(post), "https://realhouseiq.com/blog/news"
        )

    def test_root_is_bare_origin(self) -> None:
        """The root path renders as the origin itself."""
        self.assertEqual(canonical_url("/"), "https://realhouseiq.com")

    def test_query_string_kept(self) -> None:
        """The path is normalised but the query is left untouched."""
        self.assertEqual(
            canonical_url("/Properties/?type=villa&price=under-450k"),
            "https://realhouseiq.com/properties?type=villa&price=under-450k",
        )
        self.assertEqual(
            canonical_url("/?ref=home"), "https://realhouseiq.com?ref=home"
        )

    def test_origin_with_trailing_slash(self) -> None:
        """A configured trailing slash does not double up."""
        with patch.object(
            Settings, "SITE_ORIGIN", "https://realhouseiq.com/"
        ):
            self.assertEqual(
                canonical_url("//blog//"), "https://realhouseiq.com/blog"
            )
            self.assertNotIn("//blog", absolute_url("//blog"))

    def test_absolute_url_passthrough(self) -> None:
        """Already-absolute URLs are returned unchanged."""
        self.assertEqual(
            absolute_url("https://example.com/a"), "https://example.com/a"
        )

    def test_absolute_url_relative_without_slash(self) -> None:
        """A missing leading slash is added."""
        self.assertEqual(
            absolute_url("blog"), "https://realhouseiq.com/blog"
        )


if __name__ == "__main__":
    unittest.main()
