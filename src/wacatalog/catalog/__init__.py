"""Catalog Module for wacatalog.

Typed access to Graph API product catalogs:
- Catalog creation, listing and deletion
- Product creation, listing, partial update and deletion
"""

from .client import (
    Account,
    CatalogClient,
    CatalogInfo,
    ProductInfo,
    ProductInput,
    format_price,
)

__all__ = [
    "Account",
    "CatalogClient",
    "CatalogInfo",
    "ProductInfo",
    "ProductInput",
    "format_price",
]
