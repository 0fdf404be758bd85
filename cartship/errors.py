"""
Exception types raised by the cartship harness.
"""

from __future__ import annotations

from typing import Optional


class CartshipError(Exception):
    """Base class for harness errors."""


class ConfigError(CartshipError):
    """Settings could not be loaded or are invalid."""


class StoreAPIError(CartshipError):
    """The WooCommerce REST API answered with a non-2xx status.

    Attributes:
        method: HTTP method of the failed request
        path: Endpoint path relative to the API root
        status_code: HTTP status returned by the store
        code: WooCommerce error code (e.g. ``woocommerce_rest_invalid_id``)
        message: Human readable error message from the store
    """

    def __init__(
        self,
        method: str,
        path: str,
        status_code: int,
        code: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.code = code
        self.message = message
        detail = f"{method} {path} -> {status_code}"
        if code:
            detail += f" [{code}]"
        if message:
            detail += f": {message}"
        super().__init__(detail)


class TeardownError(CartshipError):
    """One or more deletions failed during teardown."""

    def __init__(self, errors: list[Exception]):
        self.errors = list(errors)
        summary = "; ".join(str(e) for e in self.errors)
        super().__init__(f"Teardown failed for {len(self.errors)} item(s): {summary}")
