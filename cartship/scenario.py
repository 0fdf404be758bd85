"""
Default fixtures for the Cart block shipping suite.
"""

from __future__ import annotations

import uuid

from .models import (
    ProductSpec,
    ShippingAddress,
    ShippingMethodSpec,
    ShippingZoneSpec,
    StoreScenario,
)

FIRST_PRODUCT = ProductSpec(name="First Product", regular_price="10.00")
SECOND_PRODUCT = ProductSpec(name="Second Product", regular_price="20.00")

FREE_SHIPPING = ShippingMethodSpec(method_id="free_shipping", title="Free shipping")
FLAT_RATE = ShippingMethodSpec(method_id="flat_rate", title="Flat rate", cost="5.00")
LOCAL_PICKUP = ShippingMethodSpec(method_id="local_pickup", title="Local pickup")

NETHERLANDS_ZONE = ShippingZoneSpec(
    name="Netherlands Free Shipping",
    countries=("NL",),
    methods=(FREE_SHIPPING,),
)
PORTUGAL_ZONE = ShippingZoneSpec(
    name="Portugal Flat Local",
    countries=("PT",),
    methods=(FLAT_RATE, LOCAL_PICKUP),
)

DEFAULT_SCENARIO = StoreScenario(
    products=(FIRST_PRODUCT, SECOND_PRODUCT),
    zones=(NETHERLANDS_ZONE, PORTUGAL_ZONE),
    currency="USD",
    allowed_countries="all",
)

NETHERLANDS = ShippingAddress(country="Netherlands", postcode="1011AA", city="Amsterdam")
PORTUGAL = ShippingAddress(country="Portugal", postcode="1000-001", city="Lisbon")


def unique_page_title(prefix: str = "Cart Block") -> str:
    """Page title that will not collide with earlier runs."""
    return f"{prefix} {uuid.uuid1()}"


def page_slug(title: str) -> str:
    """Slug WordPress assigns to a page with this title."""
    return title.replace(" ", "-").lower()
