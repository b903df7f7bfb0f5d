# main.py

"""Entry point for the realhouse_seo command-line tools."""

import argparse
import logging
import sys

from realhouse_seo.config.logging_config import setup_logging
from realhouse_seo.config.settings import Settings

logger = logging.getLogger("realhouse_seo.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="realhouse_seo",
        description="SEO URL routing and related-content engine.",
        epilog=f"Site origin: {Settings.SITE_ORIGIN}",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        dest="as_json",
        help="Print machine-readable JSON instead of tables.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO log records to stderr.",
    )
    parser.add_argument(
        "-c",
        "--content",
        default=None,
        dest="content_path",
        help="Content JSON file (default: data/content.json).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    slug = sub.add_parser("slug", help="Slugify and normalise text.")
    slug.add_argument("text")

    redirect = sub.add_parser(
        "redirect", help="Show the redirect target for a path."
    )
    redirect.add_argument("path")

    filter_cmd = sub.add_parser(
        "filter", help="Decode a listing filter query string."
    )
    filter_cmd.add_argument("query")

    route = sub.add_parser(
        "route", help="Resolve a request path against the content."
    )
    route.add_argument("path")

    related = sub.add_parser(
        "related", help="Rank properties related to a property id."
    )
    related.add_argument("property_id")
    related.add_argument(
        "-n",
        "--limit",
        type=int,
        default=Settings.RELATED_PROPERTIES_LIMIT,
        help="Maximum number of results.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Dispatch a CLI subcommand and return its exit code."""
    args = _build_parser().parse_args(argv)
    log_file = setup_logging(verbose=args.verbose)
    logger.info("Running '%s', log file: %s", args.command, log_file)

    from realhouse_seo.cli import runner

    if args.command == "slug":
        return runner.run_slug(args.text, args.as_json)
    if args.command == "redirect":
        return runner.run_redirect(args.path, args.as_json)
    if args.command == "filter":
        return runner.run_filter(args.query, args.as_json)
    if args.command == "route":
        return runner.run_route(args.path, args.content_path, args.as_json)
    return runner.run_related(
        args.property_id, args.limit, args.content_path, args.as_json
    )


if __name__ == "__main__":
    sys.exit(main())
