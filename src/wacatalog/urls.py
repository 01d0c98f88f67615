"""URL helpers.

Every catalog endpoint lives under ``{base}/{api_version}/``:

- catalog collection:  {base}/{ver}/{business_id}/owned_product_catalogs
- product collection:  {base}/{ver}/{catalog_id}/products
- single resource:     {base}/{ver}/{id}

Users frequently configure the base URL as ``graph.facebook.com``,
``https://graph.facebook.com/`` or even with a version suffix
(``https://graph.facebook.com/v21.0``). These helpers normalize it to
``scheme://host`` so the version always comes from the account.
"""

from __future__ import annotations

from urllib.parse import urlencode, urlparse

DEFAULT_BASE_URL = "https://graph.facebook.com"

PRODUCT_FIELDS = "id,name,price,currency,url,image_url,retailer_id,description"


def _ensure_scheme(url: str) -> str:
    url = (url or "").strip()
    if not url:
        return url
    # Allow "graph.facebook.com" style inputs.
    if "://" not in url:
        return "https://" + url
    return url


def root_url(base_url: str) -> str:
    """Return the server root URL: scheme://host[:port]

    Any path component is discarded; versioned paths are rebuilt per call.
    """
    if not (base_url or "").strip():
        return DEFAULT_BASE_URL
    u = urlparse(_ensure_scheme(base_url))
    scheme = u.scheme or "https"
    netloc = u.netloc or u.path
    return f"{scheme}://{netloc}".rstrip("/")


def normalize_api_version(version: str) -> str:
    """Return the version with a single leading 'v' (``21.0`` -> ``v21.0``)."""
    v = (version or "").strip().strip("/")
    if v and not v.startswith("v"):
        v = "v" + v
    return v


def resource_url(base_url: str, api_version: str, object_id: str) -> str:
    return f"{base_url.rstrip('/')}/{api_version}/{object_id}"


def catalogs_url(base_url: str, api_version: str, business_id: str) -> str:
    return f"{resource_url(base_url, api_version, business_id)}/owned_product_catalogs"


def catalog_products_url(base_url: str, api_version: str, catalog_id: str) -> str:
    return f"{resource_url(base_url, api_version, catalog_id)}/products"


def catalog_products_query_url(base_url: str, api_version: str, catalog_id: str) -> str:
    """Product collection URL with the fixed field selection appended."""
    query = urlencode({"fields": PRODUCT_FIELDS})
    return f"{catalog_products_url(base_url, api_version, catalog_id)}?{query}"
