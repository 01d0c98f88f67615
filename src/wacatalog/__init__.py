"""wacatalog: client for WhatsApp Business product catalogs on the Graph API."""

from .catalog import Account, CatalogClient, CatalogInfo, ProductInfo, ProductInput
from .errors import CatalogError, DecodeError, RequestError
from .transport import RequestContext, Transport

__version__ = "0.1.0"

__all__ = [
    "Account",
    "CatalogClient",
    "CatalogInfo",
    "ProductInfo",
    "ProductInput",
    "CatalogError",
    "DecodeError",
    "RequestError",
    "RequestContext",
    "Transport",
]
