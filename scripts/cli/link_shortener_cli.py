#!/usr/bin/env python3
"""
Command-line interface for the link shortener service.

Works directly against the store, bypassing HTTP.

Usage:
    python link_shortener_cli.py shorten <url> [--alias ALIAS]
    python link_shortener_cli.py resolve <short_code>
    python link_shortener_cli.py details <short_code>
    python link_shortener_cli.py health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from linkshort.database import PostgresLinkRepository
from linkshort.errors import LinkShortenerError
from linkshort.service import LinkShortenerService
from linkshort.shortcode import ShortCodeGenerator
from linkshort.common.logging_config import setup_logging


def _print_json(payload: dict, error: bool = False) -> None:
    print(json.dumps(payload, indent=2, default=str), file=sys.stderr if error else sys.stdout)


class LinkShortenerCLI:
    """Command-line interface for the link shortener."""

    def __init__(self, db_url: str, base_url: str, verbose: bool = False):
        self.db_url = db_url
        self.base_url = base_url
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service: Optional[LinkShortenerService] = None

    async def initialize(self):
        """Initialize repository and service."""
        repository = PostgresLinkRepository(
            db_config=self.db_url,
            logger=self.logger.getChild("store"),
        )
        self.service = LinkShortenerService(
            repository=repository,
            base_url=self.base_url,
            short_code_generator=ShortCodeGenerator(),
            logger=self.logger.getChild("service"),
        )

    async def cleanup(self):
        if self.service:
            await self.service.close()

    async def shorten(self, url: str, alias: Optional[str] = None) -> int:
        """Shorten a URL."""
        try:
            summary = await self.service.create_short_link(url, custom_alias=alias)
        except LinkShortenerError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1

        _print_json({"success": True, **summary})
        return 0

    async def resolve(self, short_code: str) -> int:
        """Resolve a short code to its long URL (counts as a click)."""
        try:
            long_url = await self.service.get_long_url(short_code)
        except LinkShortenerError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1

        _print_json({"success": True, "short_code": short_code, "long_url": long_url})
        return 0

    async def details(self, short_code: str) -> int:
        """Show a short link's summary."""
        try:
            summary = await self.service.get_short_link_details(short_code)
        except LinkShortenerError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1

        _print_json({"success": True, **summary})
        return 0

    async def health(self) -> int:
        """Check store health."""
        health_status = await self.service.health_check()
        _print_json({"success": health_status["overall"], "health": health_status})
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Link Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shorten https://example.com/long/url
  %(prog)s shorten https://example.com/long/url --alias mylink
  %(prog)s resolve mylink
  %(prog)s details mylink
  %(prog)s health
        """
    )

    parser.add_argument(
        "--db-url",
        default=os.getenv("DATABASE_URL"),
        help="PostgreSQL connection URL (default: DATABASE_URL env)"
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("BASE_URL", os.getenv("LINK_SHORTENER_URL", "http://localhost:3005")),
        help="Base URL for short links (default: BASE_URL env)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--alias", help="Custom alias")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a short code (counts a click)")
    resolve_parser.add_argument("short_code", help="Short code to resolve")

    details_parser = subparsers.add_parser("details", help="Show short link details")
    details_parser.add_argument("short_code", help="Short code to describe")

    subparsers.add_parser("health", help="Check store health")

    return parser


async def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if not args.db_url:
        parser.error("--db-url or DATABASE_URL is required")

    cli = LinkShortenerCLI(db_url=args.db_url, base_url=args.base_url, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url, args.alias)
        elif args.command == "resolve":
            return await cli.resolve(args.short_code)
        elif args.command == "details":
            return await cli.details(args.short_code)
        elif args.command == "health":
            return await cli.health()

        parser.print_help()
        return 1
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
