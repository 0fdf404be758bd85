"""
Descriptions of store fixtures and records of what was created.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

SHIPPING_METHOD_IDS = ("flat_rate", "free_shipping", "local_pickup")


@dataclass(frozen=True)
class ProductSpec:
    """A simple product to create through the REST API."""

    name: str
    regular_price: str
    type: str = "simple"

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "regular_price": self.regular_price,
        }


@dataclass(frozen=True)
class ShippingMethodSpec:
    """A shipping method to attach to a zone.

    Attributes:
        method_id: WooCommerce method id (flat_rate, free_shipping, local_pickup)
        title: Label shown to the shopper
        cost: Decimal string; omitted from the payload when unset
    """

    method_id: str
    title: str
    cost: Optional[str] = None

    def __post_init__(self):
        if self.method_id not in SHIPPING_METHOD_IDS:
            raise ValueError(
                f"Unknown shipping method {self.method_id!r}; "
                f"expected one of {', '.join(SHIPPING_METHOD_IDS)}"
            )

    def to_payload(self) -> dict[str, Any]:
        settings = {"title": self.title}
        if self.cost is not None:
            settings["cost"] = self.cost
        return {"method_id": self.method_id, "settings": settings}


@dataclass(frozen=True)
class ShippingZoneSpec:
    """A named zone with its countries and ordered methods."""

    name: str
    countries: tuple[str, ...]
    methods: tuple[ShippingMethodSpec, ...] = ()

    def method(self, method_id: str) -> ShippingMethodSpec:
        """Return the first method with the given id.

        Raises:
            KeyError: If the zone has no such method
        """
        for method in self.methods:
            if method.method_id == method_id:
                return method
        raise KeyError(f"Zone {self.name!r} has no {method_id} method")


@dataclass(frozen=True)
class StoreScenario:
    """Everything a suite needs seeded before it runs."""

    products: tuple[ProductSpec, ...]
    zones: tuple[ShippingZoneSpec, ...]
    currency: str = "USD"
    allowed_countries: str = "all"

    def product(self, name: str) -> ProductSpec:
        for product in self.products:
            if product.name == name:
                return product
        raise KeyError(f"No product named {name!r} in scenario")

    def zone(self, name: str) -> ShippingZoneSpec:
        for zone in self.zones:
            if zone.name == name:
                return zone
        raise KeyError(f"No shipping zone named {name!r} in scenario")


@dataclass(frozen=True)
class ShippingAddress:
    """Address typed into the cart's shipping calculator."""

    country: str
    postcode: str
    city: str


@dataclass
class SeededStore:
    """Ids of the entities a seed run created, keyed by name."""

    product_ids: dict[str, int] = field(default_factory=dict)
    zone_ids: dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.product_ids and not self.zone_ids

    def product_id(self, name: str) -> int:
        return self.product_ids[name]

    def zone_id(self, name: str) -> int:
        return self.zone_ids[name]

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_ids": dict(self.product_ids),
            "zone_ids": dict(self.zone_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeededStore":
        return cls(
            product_ids={str(k): int(v) for k, v in data.get("product_ids", {}).items()},
            zone_ids={str(k): int(v) for k, v in data.get("zone_ids", {}).items()},
        )
