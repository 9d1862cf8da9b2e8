"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS earthquake API client (HTTP)
- USGS volcano API client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from geohazards.shell.usgs_client import USGSClient
from geohazards.shell.volcano_client import VolcanoClient
from geohazards.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "USGSClient",
    "VolcanoClient",
    "load_config",
    "load_config_from_env",
]
