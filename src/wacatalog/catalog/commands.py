"""Catalog CLI Commands for wacatalog.

Top-level commands:
- configure/status
- catalogs/create-catalog/delete-catalog
- products/create-product/update-product/delete-product
"""

from __future__ import annotations

import argparse
from typing import Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import Settings
from ..errors import CatalogError
from ..transport import Transport
from .client import Account, CatalogClient, ProductInput

console = Console()


def _mask(token: str) -> str:
    if not token:
        return "[dim]not set[/dim]"
    if len(token) <= 8:
        return "****"
    return f"{token[:4]}...{token[-4:]}"


def _connect() -> Optional[Tuple[CatalogClient, Account]]:
    """Build a client for the saved settings, or None if not configured."""
    settings = Settings.load()
    if not settings.is_configured():
        console.print("[yellow]Catalog access not configured.[/yellow]")
        console.print("Run [bold]wacatalog configure[/bold] first.")
        return None
    transport = Transport(settings.base_url, timeout_s=settings.timeout_s)
    return CatalogClient(transport), settings.account()


def _confirm(msg: str, force: bool) -> bool:
    if force:
        return True
    answer = console.input(f"{msg} [y/N] ").strip().lower()
    return answer in ("y", "yes")


# --- Configuration Commands ---

def cmd_configure(args: argparse.Namespace) -> int:
    """Write business id, token and endpoint settings."""
    s = Settings.load()

    if args.base_url:
        s.base_url = args.base_url
    if args.api_version:
        s.api_version = args.api_version
    if args.business_id:
        s.business_id = args.business_id
    if args.token:
        s.access_token = args.token

    if not s.business_id:
        s.business_id = console.input("Business ID: ").strip()
    if not s.access_token:
        s.access_token = console.input("Access token: ", password=True).strip()

    if not s.is_configured():
        console.print("[red]Business ID and access token are required.[/red]")
        return 1

    s.normalize()
    path = s.save()
    console.print(f"[green]Wrote config:[/green] {path}")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show current settings."""
    s = Settings.load()

    lines = [
        f"[bold]Endpoint:[/bold] {s.base_url}/{s.api_version}",
        f"[bold]Business ID:[/bold] {s.business_id or '[dim]not set[/dim]'}",
        f"[bold]Access token:[/bold] {_mask(s.access_token)}",
        f"[bold]Timeout:[/bold] {s.timeout_s}s",
        "",
    ]
    if s.is_configured():
        lines.append("[green]Configured[/green]")
    else:
        lines.append("[yellow]Not configured[/yellow]: run [bold]wacatalog configure[/bold]")

    console.print(Panel("\n".join(lines), title="wacatalog status", border_style="cyan"))
    return 0


# --- Catalog Commands ---

def cmd_catalogs(args: argparse.Namespace) -> int:
    """List catalogs owned by the business."""
    conn = _connect()
    if conn is None:
        return 1
    client, account = conn

    try:
        catalogs = client.list_catalogs(account)
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if not catalogs:
        console.print("[yellow]No catalogs found.[/yellow]")
        return 0

    table = Table(title="Catalogs")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Vertical")
    table.add_column("Products", justify="right")

    for c in catalogs:
        table.add_row(c.id, c.name, c.vertical, str(c.product_count))

    console.print(table)
    console.print(f"\nTotal: {len(catalogs)} catalog(s)")
    return 0


def cmd_create_catalog(args: argparse.Namespace) -> int:
    conn = _connect()
    if conn is None:
        return 1
    client, account = conn

    try:
        catalog_id = client.create_catalog(account, args.name)
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(f"[green]Catalog created:[/green] {catalog_id}")
    return 0


def cmd_delete_catalog(args: argparse.Namespace) -> int:
    if not _confirm(f"Delete catalog '{args.id}'?", args.force):
        console.print("[yellow]Cancelled.[/yellow]")
        return 0

    conn = _connect()
    if conn is None:
        return 1
    client, account = conn

    try:
        client.delete_catalog(account, args.id)
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(f"[green]Catalog '{args.id}' deleted.[/green]")
    return 0


# --- Product Commands ---

def cmd_products(args: argparse.Namespace) -> int:
    """List products in a catalog."""
    conn = _connect()
    if conn is None:
        return 1
    client, account = conn

    try:
        products = client.list_catalog_products(account, args.catalog_id)
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if not products:
        console.print("[yellow]No products found.[/yellow]")
        return 0

    table = Table(title=f"Products in {args.catalog_id}")
    table.add_column("ID", style="cyan")
    table.add_column("Retailer ID", style="magenta")
    table.add_column("Name", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("Currency")

    for p in products:
        table.add_row(p.id, p.retailer_id, p.name, p.price, p.currency)

    console.print(table)
    console.print(f"\nTotal: {len(products)} product(s)")
    return 0


def _product_from_args(args: argparse.Namespace) -> ProductInput:
    return ProductInput(
        name=args.name or "",
        price=args.price or 0,
        currency=args.currency or "",
        url=args.url or "",
        image_url=args.image_url or "",
        retailer_id=getattr(args, "retailer_id", None) or "",
        description=args.description or "",
    )


def cmd_create_product(args: argparse.Namespace) -> int:
    conn = _connect()
    if conn is None:
        return 1
    client, account = conn

    try:
        product_id = client.create_product(account, args.catalog_id, _product_from_args(args))
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(f"[green]Product created:[/green] {product_id}")
    return 0


def cmd_update_product(args: argparse.Namespace) -> int:
    conn = _connect()
    if conn is None:
        return 1
    client, account = conn

    try:
        client.update_product(account, args.id, _product_from_args(args))
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(f"[green]Product '{args.id}' updated.[/green]")
    return 0


def cmd_delete_product(args: argparse.Namespace) -> int:
    if not _confirm(f"Delete product '{args.id}'?", args.force):
        console.print("[yellow]Cancelled.[/yellow]")
        return 0

    conn = _connect()
    if conn is None:
        return 1
    client, account = conn

    try:
        client.delete_product(account, args.id)
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(f"[green]Product '{args.id}' deleted.[/green]")
    return 0


# --- Parser Setup ---

def _add_product_fields(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--name", required=required, help="Product name")
    parser.add_argument("--price", type=int, required=required, help="Price in minor units (1999 = 19.99)")
    parser.add_argument("--currency", required=required, help="ISO 4217 currency code")
    parser.add_argument("--url", required=required, help="Product page URL")
    parser.add_argument("--image-url", required=required, help="Product image URL")
    parser.add_argument("--description", help="Product description")


def add_catalog_commands(subparsers: argparse._SubParsersAction) -> None:
    """Add catalog-related commands to the main parser."""

    # configure
    p_configure = subparsers.add_parser("configure", help="Save business id and access token")
    p_configure.add_argument("--business-id", help="WhatsApp Business / Meta business ID")
    p_configure.add_argument("--token", help="Graph API access token")
    p_configure.add_argument("--api-version", help="Graph API version (e.g. v21.0)")
    p_configure.add_argument("--base-url", help="Graph API base URL")
    p_configure.set_defaults(func=cmd_configure)

    # status
    p_status = subparsers.add_parser("status", help="Show configuration")
    p_status.set_defaults(func=cmd_status)

    # catalogs
    p_catalogs = subparsers.add_parser("catalogs", help="List catalogs")
    p_catalogs.set_defaults(func=cmd_catalogs)

    p_create_catalog = subparsers.add_parser("create-catalog", help="Create a catalog")
    p_create_catalog.add_argument("name", help="Catalog name")
    p_create_catalog.set_defaults(func=cmd_create_catalog)

    p_delete_catalog = subparsers.add_parser("delete-catalog", help="Delete a catalog")
    p_delete_catalog.add_argument("id", help="Catalog ID")
    p_delete_catalog.add_argument("--force", "-f", action="store_true", help="Skip confirmation")
    p_delete_catalog.set_defaults(func=cmd_delete_catalog)

    # products
    p_products = subparsers.add_parser("products", help="List products in a catalog")
    p_products.add_argument("catalog_id", help="Catalog ID")
    p_products.set_defaults(func=cmd_products)

    p_create_product = subparsers.add_parser("create-product", help="Add a product to a catalog")
    p_create_product.add_argument("catalog_id", help="Catalog ID")
    _add_product_fields(p_create_product, required=True)
    p_create_product.add_argument("--retailer-id", required=True, help="Your own product identifier (SKU)")
    p_create_product.set_defaults(func=cmd_create_product)

    p_update_product = subparsers.add_parser("update-product", help="Update product fields")
    p_update_product.add_argument("id", help="Product ID")
    _add_product_fields(p_update_product, required=False)
    p_update_product.set_defaults(func=cmd_update_product)

    p_delete_product = subparsers.add_parser("delete-product", help="Delete a product")
    p_delete_product.add_argument("id", help="Product ID")
    p_delete_product.add_argument("--force", "-f", action="store_true", help="Skip confirmation")
    p_delete_product.set_defaults(func=cmd_delete_product)


def run_catalog_command(args: argparse.Namespace) -> int:
    """Run a catalog command if func is set."""
    if getattr(args, "func", None):
        return args.func(args)
    return -1  # No command given
