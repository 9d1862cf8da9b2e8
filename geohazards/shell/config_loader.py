"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in geohazards/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from geohazards.core.catalog import default_prices
from geohazards.core.config import Config


logger = logging.getLogger(__name__)

# Environment variable -> Config field read by load_config_from_env
ENV_FIELDS = {
    "EARTHQUAKE_API_URL": "earthquake_api_url",
    "VOLCANO_API_URL": "volcano_api_url",
    "REQUEST_TIMEOUT_SECONDS": "request_timeout_seconds",
    "LOG_LEVEL": "log_level",
    "ALLOWED_ORIGINS": "allowed_origins",
    "PORT": "port",
}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_origins(value: Any) -> list[str]:
    """Parse CORS origins from a list or a comma-separated string."""
    if isinstance(value, str):
        return [o.strip() for o in value.split(",") if o.strip()]
    return [str(_resolve_value(o)) for o in value]


def _parse_prices(data: dict[str, Any]) -> dict[str, int]:
    """Merge configured prices over the default catalog prices."""
    prices = default_prices()
    for key, amount in data.items():
        prices[key] = int(_resolve_value(amount))
    return prices


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()

    return Config(
        service_name=_resolve_value(data.get("service_name", defaults.service_name)),
        service_version=str(data.get("service_version", defaults.service_version)),
        earthquake_api_url=_resolve_value(
            data.get("earthquake_api_url", defaults.earthquake_api_url)
        ),
        volcano_api_url=_resolve_value(data.get("volcano_api_url", defaults.volcano_api_url)),
        request_timeout_seconds=float(
            _resolve_value(data.get("request_timeout_seconds", defaults.request_timeout_seconds))
        ),
        log_level=str(_resolve_value(data.get("log_level", defaults.log_level))).upper(),
        allowed_origins=_parse_origins(data.get("allowed_origins", defaults.allowed_origins)),
        prices=_parse_prices(data.get("prices") or {}),
        port=int(_resolve_value(data.get("port", defaults.port))),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: earthquakes=%s volcanoes=%s timeout=%.1fs",
        config.earthquake_api_url,
        config.volcano_api_url,
        config.request_timeout_seconds,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for container deployments without a YAML file.

    Environment variables:
        EARTHQUAKE_API_URL: USGS event query endpoint
        VOLCANO_API_URL: USGS volcano list endpoint
        REQUEST_TIMEOUT_SECONDS: Upstream request timeout
        LOG_LEVEL: Logging level
        ALLOWED_ORIGINS: Comma-separated CORS origins
        PORT: HTTP port

    Returns:
        Config object from environment
    """
    data: dict[str, Any] = {}

    for env_name, field_name in ENV_FIELDS.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value

    return load_config_from_dict(data)
