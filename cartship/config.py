"""
Store connection settings.

Settings are resolved in two layers:

1. **YAML file** (optional): path passed explicitly or taken from
   ``CARTSHIP_CONFIG``.
2. **Environment variables**: ``BASE_URL``, ``CONSUMER_KEY``,
   ``CONSUMER_SECRET``, ``ADMINSTATE`` and ``WC_API_VERSION``.

Environment variables take precedence over the file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .logging_config import get_logger

logger = get_logger("config")

CONFIG_PATH_ENV = "CARTSHIP_CONFIG"

# Environment variable -> settings field
ENV_FIELDS = {
    "BASE_URL": "base_url",
    "CONSUMER_KEY": "consumer_key",
    "CONSUMER_SECRET": "consumer_secret",
    "ADMINSTATE": "admin_state",
    "WC_API_VERSION": "api_version",
}

REQUIRED_FIELDS = ("base_url", "consumer_key", "consumer_secret")


class StoreSettings(BaseModel):
    """Connection settings for the store under test.

    Attributes:
        base_url: Root URL of the WordPress site (no trailing slash)
        consumer_key: WooCommerce REST API consumer key
        consumer_secret: WooCommerce REST API consumer secret
        admin_state: Path to a Playwright storage state holding an admin session
        api_version: REST namespace, ``wc/v3`` by default
        timeout: HTTP timeout in seconds
        verify_ssl: Verify TLS certificates for HTTPS stores
    """

    base_url: Optional[str] = None
    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    admin_state: Optional[Path] = None
    api_version: str = "wc/v3"
    timeout: float = Field(default=30.0, gt=0)
    verify_ssl: bool = True

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        if not value:
            return None
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {value!r}")
        return value

    @field_validator("api_version")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip("/")

    def missing(self) -> list[str]:
        """Names of required settings that are unset."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    @property
    def is_complete(self) -> bool:
        return not self.missing()

    @property
    def is_https(self) -> bool:
        return bool(self.base_url) and self.base_url.startswith("https://")

    def masked(self) -> dict[str, Any]:
        """Settings as a dict with secrets partially hidden."""
        data = self.model_dump()
        for name in ("consumer_key", "consumer_secret"):
            data[name] = _mask(data[name])
        if data["admin_state"] is not None:
            data["admin_state"] = str(data["admin_state"])
        return data


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return secret
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:6]}...{secret[-2:]}"


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML settings file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed mapping, or empty dict if the file is empty

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return raw


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> StoreSettings:
    """Resolve store settings from YAML and the environment.

    Args:
        config_path: YAML file to read. Defaults to ``$CARTSHIP_CONFIG`` if set.
        environ: Environment mapping, ``os.environ`` by default

    Returns:
        Validated StoreSettings (possibly incomplete; check ``missing()``)

    Raises:
        ConfigError: If the YAML file or any value is invalid
    """
    if environ is None:
        environ = os.environ

    if config_path is None and environ.get(CONFIG_PATH_ENV):
        config_path = Path(environ[CONFIG_PATH_ENV])

    data: dict[str, Any] = {}
    if config_path is not None:
        data.update(_load_yaml_file(Path(config_path)))
        logger.debug(f"Loaded settings file {config_path}")

    for env_name, field_name in ENV_FIELDS.items():
        value = environ.get(env_name)
        if value:
            data[field_name] = value

    try:
        settings = StoreSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid store settings: {e}") from e

    missing = settings.missing()
    if missing:
        logger.debug(f"Store settings incomplete, missing: {', '.join(missing)}")
    return settings
