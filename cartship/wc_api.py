"""
WooCommerce REST API client used to seed and clean up store fixtures.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import httpx
from authlib.integrations.httpx_client import OAuth1Auth
from authlib.oauth1 import SIGNATURE_HMAC_SHA1, SIGNATURE_TYPE_QUERY

from .config import StoreSettings
from .errors import ConfigError, StoreAPIError
from .logging_config import get_logger
from .models import ProductSpec, ShippingMethodSpec

logger = get_logger("wc_api")


def _build_auth(base_url: str, consumer_key: str, consumer_secret: str) -> httpx.Auth:
    """Pick the authentication scheme WooCommerce accepts for the transport.

    WooCommerce only honours HTTP Basic credentials over HTTPS. Plain HTTP
    stores require OAuth 1.0a one-legged signatures.
    """
    if base_url.startswith("https://"):
        return httpx.BasicAuth(consumer_key, consumer_secret)
    return OAuth1Auth(
        consumer_key,
        client_secret=consumer_secret,
        signature_method=SIGNATURE_HMAC_SHA1,
        signature_type=SIGNATURE_TYPE_QUERY,
    )


def _error_details(resp: httpx.Response) -> tuple[Optional[str], Optional[str]]:
    """Extract the WooCommerce ``code`` and ``message`` from an error body."""
    try:
        body = resp.json()
    except ValueError:
        text = resp.text.strip()
        return None, text[:200] or None
    if isinstance(body, dict):
        return body.get("code"), body.get("message")
    return None, None


class WooCommerceAPI:
    """Thin client for the ``wc/v3`` REST namespace."""

    def __init__(
        self,
        settings: StoreSettings,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        missing = settings.missing()
        if missing:
            raise ConfigError(
                f"Cannot create API client, missing settings: {', '.join(missing)}"
            )

        self.settings = settings
        self.base_url = f"{settings.base_url}/wp-json/{settings.api_version}"
        self._client = httpx.Client(
            auth=_build_auth(
                settings.base_url, settings.consumer_key, settings.consumer_secret
            ),
            headers={"Accept": "application/json"},
            timeout=settings.timeout,
            verify=settings.verify_ssl,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _request(
        self,
        method: str,
        endpoint: str,
        payload: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        logger.debug(f"{method} {endpoint} params={params}")
        resp = self._client.request(
            method, self._url(endpoint), json=payload, params=params
        )
        if resp.status_code >= 400:
            code, message = _error_details(resp)
            raise StoreAPIError(method, endpoint, resp.status_code, code, message)
        if not resp.content:
            return None
        return resp.json()

    def get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self._request("GET", endpoint, params=params)

    def post(self, endpoint: str, payload: Any = None) -> Any:
        return self._request("POST", endpoint, payload=payload)

    def put(self, endpoint: str, payload: Any = None) -> Any:
        return self._request("PUT", endpoint, payload=payload)

    def delete(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self._request("DELETE", endpoint, params=params)

    # Settings

    def get_setting(self, group: str, setting_id: str) -> Any:
        """Return the current value of a settings option."""
        return self.get(f"settings/{group}/{setting_id}").get("value")

    def update_setting(self, group: str, setting_id: str, value: Any) -> dict:
        """Update a single settings option.

        Args:
            group: Settings group, e.g. ``general``
            setting_id: Option id, e.g. ``woocommerce_currency``
            value: New value

        Returns:
            The updated setting as returned by the store
        """
        return self.put(f"settings/{group}/{setting_id}", {"value": value})

    # Products

    def create_product(self, spec: ProductSpec) -> int:
        """Create a product and return its id."""
        return self.post("products", spec.to_payload())["id"]

    def list_products(self, search: Optional[str] = None) -> list[dict]:
        params: dict[str, Any] = {"per_page": 100}
        if search:
            params["search"] = search
        return self.get("products", params=params) or []

    def batch_delete_products(self, product_ids: Iterable[int]) -> dict:
        """Delete several products in one batch request."""
        return self.post("products/batch", {"delete": list(product_ids)})

    # Shipping zones

    def list_shipping_zones(self) -> list[dict]:
        return self.get("shipping/zones") or []

    def create_shipping_zone(self, name: str) -> int:
        """Create a shipping zone and return its id."""
        return self.post("shipping/zones", {"name": name})["id"]

    def set_zone_locations(self, zone_id: int, country_codes: Iterable[str]) -> list:
        """Replace the zone's locations with the given country codes."""
        locations = [{"code": code} for code in country_codes]
        return self.put(f"shipping/zones/{zone_id}/locations", locations)

    def add_zone_method(self, zone_id: int, method: ShippingMethodSpec) -> dict:
        """Attach a shipping method to a zone."""
        return self.post(f"shipping/zones/{zone_id}/methods", method.to_payload())

    def delete_shipping_zone(self, zone_id: int) -> dict:
        """Permanently delete a shipping zone."""
        return self.delete(f"shipping/zones/{zone_id}", params={"force": "true"})
