"""Catalog Client for wacatalog.

Maps catalog and product operations onto the Graph API endpoints used by
WhatsApp Business commerce. Each call is a single independent request;
the client holds no state between calls beyond its transport.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..errors import DecodeError
from ..urls import (
    catalog_products_query_url,
    catalog_products_url,
    catalogs_url,
    resource_url,
)

if TYPE_CHECKING:
    from ..transport import RequestContext, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    """Business context supplied with every call."""
    api_version: str
    business_id: str
    access_token: str


@dataclass
class CatalogInfo:
    """Catalog as returned by the catalog listing."""
    id: str
    name: str = ""
    product_count: int = 0
    vertical: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "CatalogInfo":
        count = data.get("product_count", 0)
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            product_count=count if isinstance(count, int) else 0,
            vertical=data.get("vertical", ""),
        )


@dataclass
class ProductInput:
    """Fields for creating or updating a product.

    ``price`` is an integer amount in minor units (1999 == 19.99).
    """
    name: str = ""
    price: int = 0
    currency: str = ""
    url: str = ""
    image_url: str = ""
    retailer_id: str = ""
    description: str = ""


@dataclass
class ProductInfo:
    """Product record from a catalog listing.

    ``price`` is kept exactly as the platform returns it; listings may
    carry a formatted amount such as ``"$19.99"``.
    """
    id: str
    name: str = ""
    price: str = ""
    currency: str = ""
    url: str = ""
    image_url: str = ""
    retailer_id: str = ""
    description: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "ProductInfo":
        price = data.get("price", "")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            price="" if price is None else str(price),
            currency=data.get("currency", ""),
            url=data.get("url", ""),
            image_url=data.get("image_url", ""),
            retailer_id=data.get("retailer_id", ""),
            description=data.get("description", ""),
        )


def format_price(price: int) -> str:
    """Encode a minor-unit price as a plain decimal string."""
    if isinstance(price, bool) or not isinstance(price, int):
        raise TypeError(f"price must be an int, got {type(price).__name__}")
    return str(price)


def _decode_object(raw: bytes) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"failed to parse response: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"failed to parse response: expected object, got {type(data).__name__}")
    return data


def _decode_id(raw: bytes) -> str:
    data = _decode_object(raw)
    obj_id = data.get("id")
    if isinstance(obj_id, bool) or not isinstance(obj_id, (str, int)):
        raise DecodeError("failed to parse response: missing 'id'")
    return str(obj_id)


def _decode_data(raw: bytes) -> List[dict]:
    data = _decode_object(raw)
    items = data.get("data")
    if not isinstance(items, list):
        raise DecodeError("failed to parse response: missing 'data' list")
    for item in items:
        if not isinstance(item, dict):
            raise DecodeError("failed to parse response: 'data' entries must be objects")
    return items


class CatalogClient:
    """Client for Graph API product catalogs.

    The transport performs the HTTP call; this class only builds URLs and
    bodies and decodes responses.
    """

    def __init__(self, transport: Optional["Transport"] = None, base_url: Optional[str] = None):
        if transport is None:
            from ..config import Settings
            from ..transport import Transport

            settings = Settings.load()
            transport = Transport(settings.base_url, timeout_s=settings.timeout_s)
        self.transport = transport
        self.base_url = (base_url or transport.base_url).rstrip("/")

    def _do(
        self,
        method: str,
        url: str,
        account: Account,
        body: Optional[Dict[str, str]] = None,
        ctx: Optional["RequestContext"] = None,
    ) -> bytes:
        return self.transport.do_request(method, url, body, account.access_token, ctx=ctx)

    # --- Catalogs ---

    def create_catalog(self, account: Account, name: str, ctx: Optional["RequestContext"] = None) -> str:
        """Create a catalog owned by the account's business; returns its id."""
        url = catalogs_url(self.base_url, account.api_version, account.business_id)
        raw = self._do("POST", url, account, {"name": name}, ctx)
        catalog_id = _decode_id(raw)
        logger.debug("created catalog %s", catalog_id)
        return catalog_id

    def list_catalogs(self, account: Account, ctx: Optional["RequestContext"] = None) -> List[CatalogInfo]:
        """List all catalogs owned by the account's business."""
        url = catalogs_url(self.base_url, account.api_version, account.business_id)
        raw = self._do("GET", url, account, ctx=ctx)
        return [CatalogInfo.from_api(item) for item in _decode_data(raw)]

    def delete_catalog(self, account: Account, catalog_id: str, ctx: Optional["RequestContext"] = None) -> None:
        url = resource_url(self.base_url, account.api_version, catalog_id)
        self._do("DELETE", url, account, ctx=ctx)

    # --- Products ---

    def list_catalog_products(
        self, account: Account, catalog_id: str, ctx: Optional["RequestContext"] = None
    ) -> List[ProductInfo]:
        """List all products in a catalog with every product field selected."""
        url = catalog_products_query_url(self.base_url, account.api_version, catalog_id)
        raw = self._do("GET", url, account, ctx=ctx)
        return [ProductInfo.from_api(item) for item in _decode_data(raw)]

    def create_product(
        self,
        account: Account,
        catalog_id: str,
        product: ProductInput,
        ctx: Optional["RequestContext"] = None,
    ) -> str:
        """Add a product to a catalog; returns the platform-assigned product id."""
        body = {
            "name": product.name,
            "price": format_price(product.price),
            "currency": product.currency,
            "url": product.url,
            "image_url": product.image_url,
            "retailer_id": product.retailer_id,
        }
        if product.description:
            body["description"] = product.description

        url = catalog_products_url(self.base_url, account.api_version, catalog_id)
        raw = self._do("POST", url, account, body, ctx)
        product_id = _decode_id(raw)
        logger.debug("created product %s in catalog %s", product_id, catalog_id)
        return product_id

    def update_product(
        self,
        account: Account,
        product_id: str,
        product: ProductInput,
        ctx: Optional["RequestContext"] = None,
    ) -> None:
        """Partially update a product.

        Only non-empty fields (and a positive price) are sent, so a field
        cannot be cleared and a price cannot be set to zero this way.
        """
        body: Dict[str, str] = {}
        if product.name:
            body["name"] = product.name
        if product.price > 0:
            body["price"] = format_price(product.price)
        if product.currency:
            body["currency"] = product.currency
        if product.url:
            body["url"] = product.url
        if product.image_url:
            body["image_url"] = product.image_url
        if product.description:
            body["description"] = product.description

        url = resource_url(self.base_url, account.api_version, product_id)
        self._do("POST", url, account, body, ctx)

    def delete_product(self, account: Account, product_id: str, ctx: Optional["RequestContext"] = None) -> None:
        url = resource_url(self.base_url, account.api_version, product_id)
        self._do("DELETE", url, account, ctx=ctx)
