"""
Pytest configuration and shared fixtures for E2E tests.

The suite runs against a live WooCommerce store:
1. Store settings come from the environment (BASE_URL, CONSUMER_KEY,
   CONSUMER_SECRET, ADMINSTATE) or a YAML file passed with --store-config
2. Products and shipping zones are seeded once per session via the REST API
3. Scenarios drive the Cart block with pytest-playwright's page fixture
4. Everything seeded is deleted again at the end of the session

Without store settings every E2E test is skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from cartship.config import StoreSettings, load_settings
from cartship.errors import ConfigError
from cartship.logging_config import get_logger
from cartship.models import SeededStore
from cartship.scenario import DEFAULT_SCENARIO
from cartship.seeding import StoreSeeder
from cartship.wc_api import WooCommerceAPI

from tests.e2e.helpers import (
    DEFAULT_VIEWPORT,
    TEST_RESULTS_DIR,
    apply_navigation_timeout,
)

logger = get_logger("e2e")


@pytest.fixture(scope="session")
def store_settings(request) -> StoreSettings:
    """Resolve store settings, skipping the E2E session if incomplete."""
    try:
        settings = load_settings(request.config.getoption("--store-config"))
    except ConfigError as e:
        pytest.fail(f"Invalid store settings: {e}")

    missing = settings.missing()
    if missing:
        pytest.skip(f"Store not configured, missing: {', '.join(missing)}")
    return settings


@pytest.fixture(scope="session")
def wc_api(store_settings) -> Generator[WooCommerceAPI, None, None]:
    """REST API client shared by the whole session."""
    with WooCommerceAPI(store_settings) as api:
        yield api


@pytest.fixture(scope="session")
def seeded_store(request, wc_api) -> Generator[SeededStore, None, None]:
    """Seed products and shipping zones once; remove them after the session.

    Yields:
        SeededStore with product and zone ids keyed by name
    """
    seeder = StoreSeeder(wc_api)
    seeded = seeder.seed(DEFAULT_SCENARIO)

    yield seeded

    if request.config.getoption("--keep-store-fixtures"):
        logger.warning(f"Keeping store fixtures: {seeded.to_dict()}")
        return
    seeder.teardown(seeded)


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, store_settings):
    """Configure browser context arguments.

    Every context points at the store and, when ADMINSTATE is set, starts
    from the stored administrator session.
    """
    args = {
        **browser_context_args,
        "base_url": store_settings.base_url,
        "viewport": DEFAULT_VIEWPORT,
        "ignore_https_errors": True,
    }

    admin_state = store_settings.admin_state
    if admin_state is not None:
        if not Path(admin_state).exists():
            pytest.skip(f"Admin storage state not found: {admin_state}")
        args["storage_state"] = str(admin_state)
    return args


@pytest.fixture(autouse=True)
def navigation_timeout(context):
    """Allow slow admin and cart pages more time to navigate."""
    apply_navigation_timeout(context)


@pytest.fixture(scope="function")
def shopper_page(page, context):
    """Page whose context starts with an empty cart.

    Clearing cookies drops both the cart session and the admin login, so the
    scenario runs as a guest shopper.
    """
    context.clear_cookies()
    yield page


# Hooks for capturing screenshots on failure
@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture screenshot on test failure."""
    outcome = yield
    rep = outcome.get_result()

    if rep.when == "call" and rep.failed:
        page = None
        for fixture_name in ["shopper_page", "page"]:
            page = item.funcargs.get(fixture_name)
            if page:
                break

        if page:
            try:
                TEST_RESULTS_DIR.mkdir(exist_ok=True)

                screenshot_path = TEST_RESULTS_DIR / f"{item.name}-failure.png"
                page.screenshot(path=str(screenshot_path), full_page=True)
                print(f"\nScreenshot saved to: {screenshot_path}")
            except Exception as e:
                print(f"\nFailed to capture screenshot: {e}")
