"""Cartship: harness for the Cart block shipping end-to-end suite."""

__version__ = "0.3.0"

from .config import StoreSettings, load_settings
from .errors import CartshipError, ConfigError, StoreAPIError, TeardownError
from .wc_api import WooCommerceAPI

__all__ = [
    "__version__",
    "StoreSettings",
    "load_settings",
    "CartshipError",
    "ConfigError",
    "StoreAPIError",
    "TeardownError",
    "WooCommerceAPI",
]
