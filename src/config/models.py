"""Configuration models and data structures."""

import os
from dataclasses import dataclass
from typing import Optional

from config.config import (
    ANALYTICS_API_URL,
    ANALYTICS_ENDPOINT,
    ANALYTICS_TIMEOUT_S,
    LOG_LEVEL,
    THOUSANDS_SEPARATOR,
)
from utils.io import maybe_load_yaml


@dataclass
class DashboardConfig:
    """Dashboard configuration with YAML override support.

    Precedence: environment variables, then the YAML ``dashboard`` section,
    then the constants in ``config.config``.
    """
    api_url: str = ANALYTICS_API_URL
    endpoint: str = ANALYTICS_ENDPOINT
    timeout_s: float = ANALYTICS_TIMEOUT_S
    log_level: str = LOG_LEVEL
    log_file: Optional[str] = None
    thousands_separator: str = THOUSANDS_SEPARATOR

    @classmethod
    def from_yaml(cls, yaml_path: Optional[str] = None) -> 'DashboardConfig':
        """Create config with optional YAML overrides."""
        yaml_config = maybe_load_yaml(yaml_path)

        # Extract dashboard section if it exists
        section = yaml_config.get('dashboard', {}) if isinstance(yaml_config, dict) else {}

        return cls(
            api_url=os.getenv('ANALYTICS_API_URL') or section.get('api_url', ANALYTICS_API_URL),
            endpoint=section.get('endpoint', ANALYTICS_ENDPOINT),
            timeout_s=float(section.get('timeout_s', ANALYTICS_TIMEOUT_S)),
            log_level=os.getenv('LOG_LEVEL') or section.get('log_level', LOG_LEVEL),
            log_file=section.get('log_file'),
            thousands_separator=str(section.get('thousands_separator', THOUSANDS_SEPARATOR)),
        )
