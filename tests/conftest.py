"""
Pytest configuration and shared fixtures for cartship tests.

This module registers the command line options used by the E2E suite and
provides offline fixtures for the unit tests: store settings, a REST client
wired to an httpx MockTransport, and a recorder for the requests it sends.
"""

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from cartship.config import StoreSettings
from cartship.wc_api import WooCommerceAPI


def pytest_addoption(parser):
    """Add custom pytest options."""
    parser.addoption(
        "--store-config",
        type=Path,
        default=None,
        help="YAML file with store settings (environment variables override it)",
    )
    parser.addoption(
        "--keep-store-fixtures",
        action="store_true",
        help="Leave seeded products and shipping zones in the store after the run",
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "e2e: Tests that drive a live store")
    config.addinivalue_line("markers", "p0: Priority 0 (critical) tests")
    config.addinivalue_line("markers", "p1: Priority 1 (important) tests")


@pytest.fixture
def https_settings():
    """Complete settings for an HTTPS store."""
    return StoreSettings(
        base_url="https://store.example.test/",
        consumer_key="ck_1234567890abcdef",
        consumer_secret="cs_abcdef1234567890",
    )


@pytest.fixture
def http_settings():
    """Complete settings for a plain HTTP store (OAuth 1.0a signing)."""
    return StoreSettings(
        base_url="http://localhost:8086",
        consumer_key="ck_local",
        consumer_secret="cs_local",
    )


class RequestLog:
    """Records requests seen by a MockTransport handler."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    def __len__(self):
        return len(self.requests)

    def __getitem__(self, index):
        return self.requests[index]

    def calls(self) -> list[tuple[str, str]]:
        """(method, path relative to wp-json/wc/v3) for each request."""
        prefix = "/wp-json/wc/v3/"
        result = []
        for request in self.requests:
            path = request.url.path
            if path.startswith(prefix):
                path = path[len(prefix):]
            result.append((request.method, path))
        return result

    def body(self, index: int):
        content = self.requests[index].content
        return json.loads(content) if content else None


@pytest.fixture
def request_log():
    return RequestLog()


@pytest.fixture
def make_api(https_settings, request_log) -> Callable[..., WooCommerceAPI]:
    """Factory for a WooCommerceAPI backed by a request handler.

    The handler receives each httpx.Request and returns an httpx.Response.
    Every request is appended to ``request_log`` before the handler runs.
    """
    clients = []

    def factory(handler, settings=None) -> WooCommerceAPI:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            request.read()
            request_log.requests.append(request)
            return handler(request)

        api = WooCommerceAPI(
            settings or https_settings,
            transport=httpx.MockTransport(recording_handler),
        )
        clients.append(api)
        return api

    yield factory

    for api in clients:
        api.close()
