"""Errors raised by the catalog client and its transport."""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Error from catalog operations."""
    pass


class RequestError(CatalogError):
    """The request failed in transit or the API answered with a non-2xx status."""

    def __init__(
        self,
        detail: str,
        status_code: Optional[int] = None,
        error_code: Optional[int] = None,
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is None:
            return self.detail
        return f"API error ({self.status_code}): {self.detail}"

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class DecodeError(CatalogError):
    """The response body did not decode into the expected JSON shape."""
    pass
