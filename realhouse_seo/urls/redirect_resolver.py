# realhouse_seo/urls/redirect_resolver.py

"""Legacy and malformed path detection for 301-style redirects.

The resolver walks an ordered table of rules and fires the first one
whose predicate matches the inbound path (query string split off).
One call performs one rewrite; :func:`resolve_fully` repeats until the
path is canonical. Each rule either removes the defect it targets or
maps a legacy prefix onto a canonical section that no rule matches
again, so repetition terminates.

Besides the legacy, trailing-slash and uppercase steps there is a final
``malformed-path`` rule. It sends paths with repeated slashes,
underscores, whitespace or stray characters to their normalised form,
so ``/properties//x`` redirects to ``/properties/x`` instead of being
served as is.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from realhouse_seo.urls.slug_codec import normalize_path_segment

logger = logging.getLogger("realhouse_seo.redirects")

# Ordered legacy → canonical map. Keys ending in "/" match as prefixes
# of any path; other keys match whole path segments only.
LEGACY_REDIRECTS: tuple[tuple[str, str], ...] = (
    ("/property/", "/properties/"),
    ("/project/", "/projects/"),
    ("/article/", "/blog/"),
    ("/listings", "/properties"),
    ("/homes", "/properties"),
    ("/real-estate", "/properties"),
    ("/buy", "/properties?status=for-sale"),
    ("/rent", "/properties?status=for-rent"),
    ("/off-plan", "/properties?status=off-plan"),
    ("/villas", "/properties?type=villa"),
    ("/apartments", "/properties?type=apartment"),
    ("/commercial", "/properties?type=commercial"),
)

_LEGACY_EXACT: dict[str, str] = dict(LEGACY_REDIRECTS)

MAX_REDIRECT_HOPS = 5


@dataclass(frozen=True)
class RedirectRule:
    """A named predicate → rewrite pair over a bare path."""

    name: str
    applies: Callable[[str], bool]
    rewrite: Callable[[str], str]


@dataclass(frozen=True)
class RedirectDecision:
    """Outcome of a fired rule."""

    rule: str
    source: str
    target: str


# ── Path helpers ─────────────────────────────────────────


def _split_query(url: str) -> tuple[str, str]:
    path, _, query = url.partition("?")
    return path, query


def _join_query(path: str, *queries: str) -> str:
    query = "&".join(q for q in queries if q)
    return f"{path}?{query}" if query else path


def _matching_prefix(path: str) -> tuple[str, str] | None:
    """First legacy entry that prefixes *path* on a segment boundary."""
    for old, new in LEGACY_REDIRECTS:
        if not path.startswith(old) or path == old:
            continue
        if old.endswith("/") or path[len(old)] == "/":
            return old, new
    return None


# ── Rule predicates and rewrites ─────────────────────────


def _is_legacy_exact(path: str) -> bool:
    return path in _LEGACY_EXACT


def _legacy_exact_target(path: str) -> str:
    return _LEGACY_EXACT[path]


def _is_legacy_prefix(path: str) -> bool:
    return _matching_prefix(path) is not None


def _legacy_prefix_target(path: str) -> str:
    match = _matching_prefix(path)
    if match is None:
        return path
    old, new = match
    new_path, new_query = _split_query(new)
    return _join_query(new_path + path[len(old):], new_query)


def _has_trailing_slash(path: str) -> bool:
    return path != "/" and path.endswith("/")


def _without_trailing_slash(path: str) -> str:
    return path.rstrip("/") or "/"


def _has_uppercase(path: str) -> bool:
    return path != path.lower()


def _is_malformed(path: str) -> bool:
    return normalize_path_segment(path) != path


REDIRECT_RULES: tuple[RedirectRule, ...] = (
    RedirectRule("legacy-exact", _is_legacy_exact, _legacy_exact_target),
    RedirectRule("legacy-prefix", _is_legacy_prefix, _legacy_prefix_target),
    RedirectRule("trailing-slash", _has_trailing_slash, _without_trailing_slash),
    RedirectRule("uppercase", _has_uppercase, str.lower),
    RedirectRule("malformed-path", _is_malformed, normalize_path_segment),
)


# ── Public API ───────────────────────────────────────────


def explain_redirect(url: str) -> RedirectDecision | None:
    """Return the first applicable rule and its target, or None.

    Rules see the raw path exactly as requested so that each defect is
    detected by the rule meant to correct it. The inbound query string
    is carried onto the target.
    """
    path, query = _split_query(url)
    for rule in REDIRECT_RULES:
        if rule.applies(path):
            target_path, target_query = _split_query(rule.rewrite(path))
            target = _join_query(target_path, target_query, query)
            logger.debug(
                "Redirect rule '%s' fired: %s → %s",
                rule.name,
                url,
                target,
            )
            return RedirectDecision(rule=rule.name, source=url, target=target)
    return None


def get_redirect_url(url: str) -> str | None:
    """Target of a single redirect step, or None when already canonical."""
    decision = explain_redirect(url)
    return decision.target if decision else None


def resolve_fully(url: str, max_hops: int = MAX_REDIRECT_HOPS) -> str:
    """Follow redirect steps until the path stabilises.

    Stops after *max_hops* rewrites and returns the last target,
    logging a warning, which never happens for the built-in rules.
    """
    current = url
    for _ in range(max_hops):
        target = get_redirect_url(current)
        if target is None:
            return current
        current = target
    if get_redirect_url(current) is not None:
        logger.warning(
            "Redirect chain for %s exceeded %d hops", url, max_hops
        )
    return current
