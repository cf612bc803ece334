"""Command-line entry point.

Examples:
  scribe-collection excerpt notes.md --max-length 100
  scribe-collection collection
  scribe-collection collection ada
  scribe-collection embed-code ada --layout grid --limit 4
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .api_client import CollectionClient
from .core.config import ConfigurationError, settings
from .core.logging_config import setup_logging
from .exceptions import ScribeException
from .formatters import format_collection, format_embed_widget
from .services.collection_service import CollectionService, validate_username
from .services.content_utils import COLLECTION_EXCERPT_LENGTH, make_excerpt
from .services.embed_service import (
    DEFAULT_EMBED_LIMIT,
    EMBED_LIMIT_CHOICES,
    EmbedLayout,
    EmbedOptions,
    build_embed_widget,
    embed_notes,
    generate_embed_code,
)

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scribe-collection",
        description="Previews and embed widgets for public document collections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_excerpt = sub.add_parser("excerpt", help="Print the preview excerpt of a file (or stdin)")
    p_excerpt.add_argument("path", nargs="?", help="File to read (default: stdin)")
    p_excerpt.add_argument(
        "--max-length", type=int, default=COLLECTION_EXCERPT_LENGTH,
        help=f"Excerpt length before the ellipsis (default: {COLLECTION_EXCERPT_LENGTH})",
    )

    p_coll = sub.add_parser("collection", help="List a collection as markdown")
    p_coll.add_argument("username", nargs="?", help="Only this user's documents")

    p_widget = sub.add_parser("embed", help="Render the embed widget as markdown")
    p_widget.add_argument("username")
    p_widget.add_argument("--layout", choices=[layout.value for layout in EmbedLayout], default="list")
    p_widget.add_argument("--limit", type=_positive_int, default=DEFAULT_EMBED_LIMIT)

    p_code = sub.add_parser("embed-code", help="Print the iframe embed snippet")
    p_code.add_argument("username")
    p_code.add_argument("--layout", choices=[layout.value for layout in EmbedLayout], default="list")
    p_code.add_argument(
        "--limit", type=int, choices=EMBED_LIMIT_CHOICES, default=DEFAULT_EMBED_LIMIT,
    )
    return parser


async def _collection(username: Optional[str]) -> str:
    client = CollectionClient()
    try:
        service = CollectionService(client, base_url=settings.public_base_url)
        if username:
            view = await service.user_collection(username)
        else:
            view = await service.public_collection()
        return format_collection(view)
    finally:
        await client.close()


async def _embed(username: str, options: EmbedOptions) -> str:
    username = validate_username(username)
    client = CollectionClient()
    try:
        response = await client.get_user_documents(username)
        widget = build_embed_widget(
            username, response.documents, options, base_url=settings.public_base_url,
        )
        return format_embed_widget(widget)
    finally:
        await client.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    setup_logging(
        settings.log_level, settings.log_format,
        stream=sys.stderr, secrets=[settings.collection_api_token],
    )

    try:
        for problem in settings.validate_production_config():
            logger.warning("Configuration: %s", problem)
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        return 1

    try:
        if args.command == "excerpt":
            text = Path(args.path).read_text(encoding="utf-8") if args.path else sys.stdin.read()
            print(make_excerpt(text, args.max_length))
        elif args.command == "collection":
            print(asyncio.run(_collection(args.username)))
        elif args.command == "embed":
            options = EmbedOptions(layout=EmbedLayout(args.layout), limit=args.limit)
            print(asyncio.run(_embed(args.username, options)))
        elif args.command == "embed-code":
            options = EmbedOptions(layout=EmbedLayout(args.layout), limit=args.limit)
            print(generate_embed_code(settings.public_base_url, args.username, options))
            for note in embed_notes(options):
                print(f"• {note}", file=sys.stderr)
    except ScribeException as e:
        logger.error(
            f"ScribeException: {e.error_code.value}",
            extra={"error_code": e.error_code.value, "details": e.details},
        )
        print(f"[Error] {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
