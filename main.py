"""Service Entry Point - Root Module.

Loads configuration, configures logging and builds the FastAPI app.
Run with `uvicorn main:app` or `python main.py`.
"""

import logging
import os

from geohazards.api import create_app
from geohazards.core.config import Config, validate_config
from geohazards.shell.config_loader import ENV_FIELDS, load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _load():
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif any(os.environ.get(name) for name in ENV_FIELDS):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def _get_config() -> Config:
    """Load and validate configuration, then apply its log level."""
    config = _load()

    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not result.valid:
        messages = "; ".join(f"{e.field}: {e.message}" for e in result.critical_errors)
        raise ValueError(f"Invalid configuration: {messages}")

    logging.getLogger().setLevel(config.log_level.upper())

    return config


config = _get_config()
app = create_app(config)


if __name__ == "__main__":
    import uvicorn

    logger.info("Geohazards agent running on port %d", config.port)
    uvicorn.run(app, host="0.0.0.0", port=config.port)
