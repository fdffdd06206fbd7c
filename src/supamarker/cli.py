"""supamarker CLI — publish markdown posts to Supabase (storage + posts table).

Usage:
    supamarker publish posts/hello-world.md
    supamarker delete hello-world [--soft] [--yes]
    supamarker list
    supamarker gen-config
    supamarker --config ./blog.toml list
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import requests
from dotenv import load_dotenv

from src.common.config import ConfigError, ResolvedConfig, default_config_path, gen_config, load_config
from src.common.logging import setup_logging

from .errors import SupamarkerError
from .models import ListingEntry
from .publisher import ConfirmFn, delete_post, list_posts, prompt_confirm, publish_post
from .session import create_session
from .storage import SupabaseStorage
from .table import PostsTable

logger = logging.getLogger(__name__)

SLUG_COLUMN_WIDTH = 32


def _add_global_options(parser: argparse.ArgumentParser, suppress: bool) -> None:
    """Add ``--config`` and ``-v``.

    Subparsers get SUPPRESS defaults so a value given before the subcommand
    is not overwritten by the subparser's own default.
    """
    parser.add_argument(
        "--config",
        type=str,
        default=argparse.SUPPRESS if suppress else None,
        help="Path to a TOML config file. Replaces the default search.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="Enable debug logging",
    )


def build_parser() -> argparse.ArgumentParser:
    # Global options are accepted before or after the subcommand.
    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, suppress=True)

    parser = argparse.ArgumentParser(
        prog="supamarker",
        description="Publish markdown posts to Supabase (storage + posts table)",
    )
    _add_global_options(parser, suppress=False)
    sub = parser.add_subparsers(dest="command", required=True)

    p_publish = sub.add_parser("publish", parents=[common], help="Publish a local markdown file")
    p_publish.add_argument("path", help="Markdown file with YAML frontmatter")

    p_delete = sub.add_parser("delete", parents=[common], help="Delete a post by slug")
    p_delete.add_argument("slug", help="Post slug (a trailing .md is ignored)")
    p_delete.add_argument(
        "--soft",
        action="store_true",
        help="Remove only the database row; keep the file in the bucket",
    )
    p_delete.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Skip the confirmation prompt",
    )

    sub.add_parser("list", parents=[common], help="List slugs and where they exist")
    sub.add_parser(
        "gen-config", parents=[common], help="Generate a sample config at the default path"
    )

    return parser


def _print_listing(entries: list[ListingEntry]) -> None:
    if not entries:
        print("No slugs found in storage bucket or table.")
        return
    print(f"{'slug':<{SLUG_COLUMN_WIDTH}}location")
    for entry in entries:
        print(f"{entry.slug:<{SLUG_COLUMN_WIDTH}}{entry.location.value}")


def _run(args: argparse.Namespace, confirm: ConfirmFn) -> int:
    if args.command == "gen-config":
        path = gen_config(default_config_path(os.environ))
        print(
            f"Sample config written to {path}. "
            "Update the values before running publish/list/delete."
        )
        return 0

    config: ResolvedConfig = load_config(args.config, cwd=Path.cwd(), env=os.environ)
    session = create_session(config)
    with session:
        storage = SupabaseStorage(config, session=session)
        table = PostsTable(config, session=session)

        if args.command == "publish":
            publish_post(args.path, storage, table)
        elif args.command == "delete":
            if args.yes:
                confirm = lambda _question: True  # noqa: E731
            delete_post(args.slug, storage, table, soft=args.soft, confirm=confirm)
        elif args.command == "list":
            _print_listing(list_posts(storage, table))

    return 0


def main(argv: Optional[list[str]] = None, confirm: ConfirmFn = prompt_confirm) -> int:
    args = build_parser().parse_args(argv)

    # Ensure UTF-8 output on Windows consoles (✓/✅ markers)
    if hasattr(sys.stdout, "reconfigure") and sys.stdout.encoding.lower() != "utf-8":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        module_name="src",
    )

    # .env never overrides variables that are already set
    load_dotenv(Path.cwd() / ".env")

    try:
        return _run(args, confirm)
    except (SupamarkerError, ConfigError, requests.RequestException) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
