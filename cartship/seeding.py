"""
Create and remove the store fixtures a suite depends on.

Setup and teardown are symmetrical: whatever ``seed`` records in the
SeededStore is exactly what ``teardown`` deletes.
"""

from __future__ import annotations

import json
from pathlib import Path

from .errors import StoreAPIError, TeardownError
from .logging_config import get_logger
from .models import SeededStore, StoreScenario
from .wc_api import WooCommerceAPI

logger = get_logger("seeding")


class StoreSeeder:
    """Seeds a StoreScenario through the REST API and cleans it up again."""

    def __init__(self, api: WooCommerceAPI):
        self.api = api

    def seed(self, scenario: StoreScenario) -> SeededStore:
        """Create products and shipping zones for a scenario.

        Ids are recorded as soon as each entity exists, so a failure halfway
        through still knows what to remove. Partial state is torn down before
        the original error is re-raised.

        Args:
            scenario: What to create

        Returns:
            SeededStore with the ids of every created product and zone
        """
        seeded = SeededStore()
        try:
            self._seed_into(scenario, seeded)
        except Exception:
            logger.error("Seeding failed, removing partially created fixtures")
            try:
                self.teardown(seeded)
            except TeardownError as cleanup_error:
                logger.error(f"Cleanup after failed seed also failed: {cleanup_error}")
            raise
        return seeded

    def _seed_into(self, scenario: StoreScenario, seeded: SeededStore) -> None:
        self.api.update_setting("general", "woocommerce_currency", scenario.currency)
        logger.info(f"Store currency set to {scenario.currency}")

        for product in scenario.products:
            product_id = self.api.create_product(product)
            seeded.product_ids[product.name] = product_id
            logger.info(f"Created product {product.name!r} (id={product_id})")

        for zone in scenario.zones:
            zone_id = self.api.create_shipping_zone(zone.name)
            seeded.zone_ids[zone.name] = zone_id
            logger.info(f"Created shipping zone {zone.name!r} (id={zone_id})")

        for zone in scenario.zones:
            self.api.set_zone_locations(seeded.zone_ids[zone.name], zone.countries)

        # Methods are posted in declared order; the first one is preselected
        for zone in scenario.zones:
            zone_id = seeded.zone_ids[zone.name]
            for method in zone.methods:
                self.api.add_zone_method(zone_id, method)
                logger.info(f"Added {method.method_id} to zone {zone.name!r}")

        self.api.update_setting(
            "general", "woocommerce_allowed_countries", scenario.allowed_countries
        )

    def teardown(self, seeded: SeededStore) -> None:
        """Delete everything recorded in a SeededStore.

        Every deletion is attempted even if an earlier one fails.

        Raises:
            TeardownError: If any deletion failed
        """
        errors: list[Exception] = []

        if seeded.product_ids:
            ids = list(seeded.product_ids.values())
            try:
                response = self.api.batch_delete_products(ids)
            except Exception as e:
                logger.error(f"Failed to delete products {ids}: {e}")
                errors.append(e)
            else:
                # The batch endpoint answers 200 and reports failures per item
                failed = _batch_item_errors(response)
                for name, product_id in list(seeded.product_ids.items()):
                    if product_id in failed:
                        logger.error(f"Failed to delete product {name!r}: {failed[product_id]}")
                        errors.append(failed[product_id])
                    else:
                        del seeded.product_ids[name]
                logger.info(f"Deleted products {[i for i in ids if i not in failed]}")

        for name, zone_id in list(seeded.zone_ids.items()):
            try:
                self.api.delete_shipping_zone(zone_id)
                logger.info(f"Deleted shipping zone {name!r} (id={zone_id})")
                del seeded.zone_ids[name]
            except Exception as e:
                logger.error(f"Failed to delete shipping zone {name!r}: {e}")
                errors.append(e)

        if errors:
            raise TeardownError(errors)

    def find_leftovers(self, scenario: StoreScenario) -> SeededStore:
        """Look up existing products and zones whose names match the scenario."""
        leftovers = SeededStore()

        product_names = {p.name for p in scenario.products}
        for name in product_names:
            for product in self.api.list_products(search=name):
                if product.get("name") == name:
                    leftovers.product_ids[f"{name}#{product['id']}"] = product["id"]

        zone_names = {z.name for z in scenario.zones}
        for zone in self.api.list_shipping_zones():
            if zone.get("name") in zone_names:
                leftovers.zone_ids[f"{zone['name']}#{zone['id']}"] = zone["id"]

        return leftovers

    def purge(self, scenario: StoreScenario) -> SeededStore:
        """Remove fixtures left behind by an earlier, aborted run.

        Returns:
            What was found (and deleted)
        """
        leftovers = self.find_leftovers(scenario)
        found = SeededStore.from_dict(leftovers.to_dict())
        if leftovers.is_empty:
            logger.info("No leftover fixtures found")
            return found
        self.teardown(leftovers)
        return found


def _batch_item_errors(response) -> dict[int, StoreAPIError]:
    """Map product id to error for items a batch delete could not remove."""
    failed: dict[int, StoreAPIError] = {}
    for item in (response or {}).get("delete", []):
        error = item.get("error")
        if not error:
            continue
        status = (error.get("data") or {}).get("status", 400)
        failed[item.get("id")] = StoreAPIError(
            "DELETE",
            f"products/{item.get('id')}",
            status,
            error.get("code"),
            error.get("message"),
        )
    return failed


def save_manifest(seeded: SeededStore, path: Path) -> None:
    """Write seeded ids to a JSON manifest."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(seeded.to_dict(), f, indent=2, sort_keys=True)


def load_manifest(path: Path) -> SeededStore:
    """Read seeded ids back from a JSON manifest.

    Raises:
        FileNotFoundError: If the manifest does not exist
        ValueError: If the manifest is not valid JSON
    """
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid manifest {path}: {e}") from e
    return SeededStore.from_dict(data)
