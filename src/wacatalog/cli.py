"""wacatalog CLI - manage WhatsApp Business product catalogs.

Usage:
    wacatalog configure              # Save business id + access token
    wacatalog status                 # Show configuration
    wacatalog catalogs               # List catalogs
    wacatalog create-catalog NAME    # Create a catalog
    wacatalog delete-catalog ID      # Delete a catalog
    wacatalog products CATALOG_ID    # List products in a catalog
    wacatalog create-product ...     # Add a product
    wacatalog update-product ID ...  # Update product fields
    wacatalog delete-product ID      # Delete a product
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .catalog.commands import add_catalog_commands, run_catalog_command

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wacatalog",
        description="Manage WhatsApp Business product catalogs via the Graph API",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every request")

    sub = parser.add_subparsers(dest="subcmd")
    add_catalog_commands(sub)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    result = run_catalog_command(args)
    if result == -1:
        parser.print_help()
        raise SystemExit(1)
    raise SystemExit(result)


if __name__ == "__main__":
    main()
