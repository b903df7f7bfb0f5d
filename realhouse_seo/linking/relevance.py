# realhouse_seo/linking/relevance.py

"""Related-content ranking for properties, projects and blog posts.

Scores are small fixed integer weights. Ranking is a stable sort by
descending score, so candidates with equal scores keep their pool
order. A record never appears in its own related list.

Two shapes of relationship exist:

* **scored**: candidates are scored, optionally gated first, and
  sorted (related properties, similar posts, post cross-links);
* **gated**: candidates are only filtered by a boolean predicate and
  keep pool order (related projects, related posts, keyword links).
"""

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from realhouse_seo.config.settings import Settings
from realhouse_seo.models.listing import BlogPost, Project, Property

logger = logging.getLogger("realhouse_seo.relevance")

T = TypeVar("T", Property, Project, BlogPost)

# Property / project states that suit investment-oriented posts
_INVESTMENT_BADGES = frozenset({"Installment"})
_INVESTMENT_PROPERTY_STATUSES = frozenset({"Off Plan"})
_READY_PROJECT_STATUS = "Ready"
_INVESTMENT_CATEGORY = "Investment"


# ── Generic ranking ──────────────────────────────────────


def rank(
    reference: T,
    pool: Iterable[T],
    score: Callable[[T, T], int],
    limit: int,
    gate: Callable[[T, T], bool] | None = None,
    drop_zero: bool = False,
) -> list[T]:
    """Rank *pool* against *reference* and return at most *limit* items.

    1. Drop the reference itself (identifier equality).
    2. Apply the optional eligibility *gate*.
    3. Score, optionally dropping zero scores.
    4. Stable sort by descending score and slice.
    """
    scored: list[tuple[int, T]] = []
    considered = 0
    for candidate in pool:
        considered += 1
        if candidate.id == reference.id:
            continue
        if gate is not None and not gate(reference, candidate):
            continue
        value = score(reference, candidate)
        if drop_zero and value <= 0:
            continue
        scored.append((value, candidate))

    # sorted() is stable: ties keep pool order
    scored = sorted(scored, key=lambda item: -item[0])
    logger.debug(
        "Ranked %d of %d candidates for %s",
        len(scored),
        considered,
        reference.id,
    )
    return [candidate for _value, candidate in scored[: max(limit, 0)]]


def _gate_only(
    reference: T,
    pool: Iterable[T],
    gate: Callable[[T, T], bool],
    limit: int,
) -> list[T]:
    """Pool-order filter by *gate*, excluding the reference."""
    return rank(reference, pool, lambda _a, _b: 0, limit, gate=gate)


def _within(price: float, reference_price: float, ratio: float) -> bool:
    return abs(price - reference_price) < reference_price * ratio


# ── Property ↔ Property ──────────────────────────────────


def is_related_property(reference: Property, candidate: Property) -> bool:
    """Eligibility gate: same type, same district, or price within 30%."""
    return (
        candidate.type == reference.type
        or candidate.location.district == reference.location.district
        or _within(candidate.price, reference.price, Settings.PRICE_GATE_RATIO)
    )


def score_property(reference: Property, candidate: Property) -> int:
    """+3 same district, +2 same type, +1 price within 20%."""
    score = 0
    if candidate.location.district == reference.location.district:
        score += 3
    if candidate.type == reference.type:
        score += 2
    if _within(candidate.price, reference.price, Settings.PRICE_SCORE_RATIO):
        score += 1
    return score


def related_properties(
    reference: Property,
    pool: Iterable[Property],
    limit: int = Settings.RELATED_PROPERTIES_LIMIT,
) -> list[Property]:
    """Properties similar to *reference*, best match first."""
    return rank(
        reference,
        pool,
        score_property,
        limit,
        gate=is_related_property,
    )


# ── Project ↔ Project ────────────────────────────────────


def is_related_project(reference: Project, candidate: Project) -> bool:
    return (
        candidate.status == reference.status
        or candidate.location.district == reference.location.district
    )


def related_projects(
    reference: Project,
    pool: Iterable[Project],
    limit: int = Settings.RELATED_PROJECTS_LIMIT,
) -> list[Project]:
    """Projects sharing status or district, in pool order."""
    return _gate_only(reference, pool, is_related_project, limit)


# ── BlogPost ↔ BlogPost ──────────────────────────────────


def _shared_tags(reference: BlogPost, candidate: BlogPost) -> int:
    """Count candidate tags that case-insensitively match a reference tag."""
    reference_tags = {tag.lower() for tag in reference.tags}
    return sum(1 for tag in candidate.tags if tag.lower() in reference_tags)


def score_post(reference: BlogPost, candidate: BlogPost) -> int:
    """+3 same category, +2 per shared tag."""
    score = 3 if candidate.category == reference.category else 0
    return score + 2 * _shared_tags(reference, candidate)


def similar_posts(
    reference: BlogPost,
    pool: Iterable[BlogPost],
    limit: int = Settings.SIMILAR_POSTS_LIMIT,
) -> list[BlogPost]:
    """Scored posts for "you may also like"; zero scores are excluded."""
    return rank(reference, pool, score_post, limit, drop_zero=True)


def is_related_post(reference: BlogPost, candidate: BlogPost) -> bool:
    return (
        candidate.category == reference.category
        or _shared_tags(reference, candidate) > 0
    )


def related_posts(
    reference: BlogPost,
    pool: Iterable[BlogPost],
    limit: int = Settings.SIMILAR_POSTS_LIMIT,
) -> list[BlogPost]:
    """Posts sharing a category or any tag, in pool order."""
    return _gate_only(reference, pool, is_related_post, limit)


# ── BlogPost → Property / Project (content cross-linking) ─


def post_keywords(post: BlogPost) -> list[str]:
    """Lower-cased keyword list: the post's tags plus its category."""
    return [tag.lower() for tag in post.tags] + [post.category.lower()]


def _any_keyword_in(keywords: Sequence[str], text: str) -> bool:
    lowered = text.lower()
    return any(keyword and keyword in lowered for keyword in keywords)


def score_property_for_post(post: BlogPost, prop: Property) -> int:
    """Cross-link weight of *prop* for a blog post.

    +3 type matches a keyword, +4 district matches a keyword,
    +3 investment post and the property is off-plan or on instalments,
    +2 a luxury keyword and price above the luxury threshold,
    +1 featured property.
    """
    keywords = post_keywords(post)
    score = 0
    if _any_keyword_in(keywords, prop.type):
        score += 3
    if _any_keyword_in(keywords, prop.location.district):
        score += 4
    if post.category == _INVESTMENT_CATEGORY and (
        prop.badges & _INVESTMENT_BADGES
        or prop.status in _INVESTMENT_PROPERTY_STATUSES
    ):
        score += 3
    if (
        any("luxury" in keyword for keyword in keywords)
        and prop.price > Settings.LUXURY_PRICE_THRESHOLD
    ):
        score += 2
    if prop.is_featured:
        score += 1
    return score


def score_project_for_post(post: BlogPost, project: Project) -> int:
    """+5 name matches a keyword, +3 district, +2 investment and not ready."""
    keywords = post_keywords(post)
    score = 0
    if _any_keyword_in(keywords, project.name):
        score += 5
    if _any_keyword_in(keywords, project.location.district):
        score += 3
    if (
        post.category == _INVESTMENT_CATEGORY
        and project.status != _READY_PROJECT_STATUS
    ):
        score += 2
    return score


def _rank_across(
    items: Iterable[T], score: Callable[[T], int], limit: int
) -> list[T]:
    """Stable descending rank across record types; zero scores dropped."""
    scored = [(score(item), item) for item in items]
    scored = [pair for pair in scored if pair[0] > 0]
    scored = sorted(scored, key=lambda pair: -pair[0])
    return [item for _value, item in scored[: max(limit, 0)]]


def relevant_properties_for_post(
    post: BlogPost,
    pool: Iterable[Property],
    limit: int = Settings.POST_PROPERTIES_LIMIT,
) -> list[Property]:
    """Properties worth linking from a blog post."""
    return _rank_across(
        pool, lambda prop: score_property_for_post(post, prop), limit
    )


def relevant_projects_for_post(
    post: BlogPost,
    pool: Iterable[Project],
    limit: int = Settings.POST_PROJECTS_LIMIT,
) -> list[Project]:
    """Projects worth linking from a blog post."""
    return _rank_across(
        pool, lambda project: score_project_for_post(post, project), limit
    )


# ── Property / Project → BlogPost (keyword gate) ─────────


def _post_text(post: BlogPost) -> str:
    return f"{post.title} {post.excerpt} {' '.join(post.tags)}".lower()


def _posts_mentioning(
    keywords: Sequence[str], pool: Iterable[BlogPost], limit: int
) -> list[BlogPost]:
    matches = [
        post for post in pool if _any_keyword_in(keywords, _post_text(post))
    ]
    return matches[: max(limit, 0)]


def blog_posts_for_property(
    prop: Property,
    pool: Iterable[BlogPost],
    limit: int = Settings.CROSS_LINK_LIMIT,
) -> list[BlogPost]:
    """Posts mentioning the property's type, district or status."""
    keywords = [
        prop.type.lower(),
        prop.location.district.lower(),
        prop.status.lower().replace(" ", "-"),
    ]
    return _posts_mentioning(keywords, pool, limit)


def blog_posts_for_project(
    project: Project,
    pool: Iterable[BlogPost],
    limit: int = Settings.CROSS_LINK_LIMIT,
) -> list[BlogPost]:
    """Posts mentioning the project's name, district or status."""
    keywords = [
        project.name.lower(),
        project.location.district.lower(),
        project.status.lower(),
    ]
    return _posts_mentioning(keywords, pool, limit)


# ── Property ↔ Project (neighbourhood) ───────────────────


def project_for_property(
    prop: Property, pool: Iterable[Project]
) -> Project | None:
    """First project in the property's district, if any."""
    for project in pool:
        if project.location.district == prop.location.district:
            return project
    return None


def properties_in_project(
    project: Project,
    pool: Iterable[Property],
    limit: int = Settings.PROJECT_PROPERTIES_LIMIT,
) -> list[Property]:
    """Properties in the project's district, in pool order."""
    matches = [
        prop
        for prop in pool
        if prop.location.district == project.location.district
    ]
    return matches[: max(limit, 0)]


def district_counts(
    pool: Iterable[Property],
    limit: int = Settings.DISTRICT_LINKS_LIMIT,
) -> list[tuple[str, int]]:
    """Districts by listing count, most first; ties keep first-seen order."""
    counts = Counter(prop.location.district for prop in pool)
    ordered = sorted(counts.items(), key=lambda item: -item[1])
    return ordered[: max(limit, 0)]
