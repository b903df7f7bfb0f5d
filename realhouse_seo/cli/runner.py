# realhouse_seo/cli/runner.py

"""Command implementations for the realhouse_seo CLI."""

import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from realhouse_seo.linking import relevance
from realhouse_seo.linking.breadcrumbs import breadcrumb_schema, render_text
from realhouse_seo.models.listing import Property
from realhouse_seo.services.page_router import PageRouter, RouteResult
from realhouse_seo.storage.content_store import ContentStore, ContentStoreError
from realhouse_seo.urls.filter_codec import encode_filter, parse_filter_params
from realhouse_seo.urls.redirect_resolver import explain_redirect, resolve_fully
from realhouse_seo.urls.slug_codec import (
    encode_property_path,
    normalize_path_segment,
    slugify,
)

logger = logging.getLogger("realhouse_seo.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _to_jsonable(value: Any) -> Any:
    """Dataclasses (and frozensets inside them) to plain JSON values."""
    if is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value


def _dump(data: Any) -> None:
    json.dump(_to_jsonable(data), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _load_store(content_path: str | None) -> ContentStore | None:
    """Load the content store, reporting failures on stderr."""
    try:
        return ContentStore.from_file(
            Path(content_path) if content_path else None
        )
    except ContentStoreError as exc:
        logger.error("Content load failed: %s", exc, exc_info=True)
        _err.print(f"[red]{exc}[/red]")
        return None


# ── Codec commands ───────────────────────────────────────


def run_slug(text: str, as_json: bool) -> int:
    """Print the slug and normalised path for *text*."""
    result = {
        "input": text,
        "slug": slugify(text),
        "normalized": normalize_path_segment(text),
    }
    if as_json:
        _dump(result)
    else:
        Console().print(f"slug:       {result['slug'] or '(empty)'}")
        Console().print(f"normalized: {result['normalized']}")
    return 0


def run_redirect(path: str, as_json: bool) -> int:
    """Explain the first redirect step and the fully resolved target."""
    decision = explain_redirect(path)
    final = resolve_fully(path)
    if as_json:
        _dump(
            {
                "path": path,
                "rule": decision.rule if decision else None,
                "target": decision.target if decision else None,
                "resolved": final,
            }
        )
        return 0

    if decision is None:
        _err.print(f"[green]✓ {path} is canonical[/green]")
        return 0
    Console().print(
        f"{path} → {decision.target}  [dim]({decision.rule})[/dim]"
    )
    if final != decision.target:
        Console().print(f"[dim]resolves fully to[/dim] {final}")
    return 0


def run_filter(query: str, as_json: bool) -> int:
    """Decode a filter query and show its canonical re-encoding."""
    search = parse_filter_params(query)
    encoded = encode_filter(search)
    if as_json:
        _dump({"filter": search, "encoded": encoded})
        return 0

    table = Table(title="Decoded Filter", title_style="bold cyan")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in asdict(search).items():
        if value is not None:
            table.add_row(key, str(value))
    Console().print(table)
    Console().print(f"canonical query: {encoded or '(empty)'}")
    return 0


# ── Content commands ─────────────────────────────────────


def _print_route(result: RouteResult) -> None:
    if result.kind == "redirect":
        Console().print(
            f"[yellow]301[/yellow] → {result.redirect_to} "
            f"[dim]({result.redirect_rule})[/dim]"
        )
        return
    if result.not_found:
        Console().print(f"[red]404[/red] {result.path}")
        return

    Console().print(f"[bold]{result.kind}[/bold] {result.identifier or ''}")
    if result.canonical_url:
        Console().print(f"[dim]canonical:[/dim] {result.canonical_url}")
    Console().print(f"[dim]trail:[/dim] {render_text(result.breadcrumbs)}")
    if result.listings:
        _print_properties("Listings", result.listings)
    for group, items in result.related.items():
        if items:
            Console().print(
                f"[magenta]related {group}:[/magenta] "
                + ", ".join(item.id for item in items)
            )


def run_route(path: str, content_path: str | None, as_json: bool) -> int:
    """Route a path against the content store and print the outcome."""
    store = _load_store(content_path)
    if store is None:
        return 1

    result = PageRouter(store).route(path)
    if as_json:
        payload = _to_jsonable(result)
        payload["breadcrumb_schema"] = breadcrumb_schema(result.breadcrumbs)
        _dump(payload)
    else:
        _print_route(result)
    return 1 if result.not_found else 0


def _print_properties(title: str, properties: list[Property]) -> None:
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", style="bold")
    table.add_column("Type")
    table.add_column("District", style="magenta")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Path", overflow="fold", style="dim")

    for idx, prop in enumerate(properties, 1):
        price_str = f"${prop.price:,.0f}" if prop.price > 0 else "Contact"
        table.add_row(
            str(idx),
            prop.id,
            prop.type,
            prop.location.district,
            price_str,
            encode_property_path(prop),
        )
    Console().print(table)


def run_related(
    property_id: str,
    limit: int,
    content_path: str | None,
    as_json: bool,
) -> int:
    """Rank related properties for *property_id*."""
    store = _load_store(content_path)
    if store is None:
        return 1

    prop = store.get_property(property_id)
    if prop is None:
        _err.print(f"[yellow]No property with id '{property_id}'[/yellow]")
        return 1

    related = relevance.related_properties(prop, store.properties, limit)
    if as_json:
        _dump(
            [
                {
                    "id": item.id,
                    "score": relevance.score_property(prop, item),
                    "path": encode_property_path(item),
                }
                for item in related
            ]
        )
    elif related:
        _print_properties(f"Related to {prop.id}", related)
    else:
        _err.print("[yellow]No related properties.[/yellow]")
    return 0
