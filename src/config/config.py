"""Project-wide single-source configuration constants for the analytics dashboard."""

import os
from pathlib import Path

from dotenv import load_dotenv

from utils.path_utils import find_repo_root, resolve_repo_path

# ----- Base directory configuration -------
PROJECT_ROOT = find_repo_root()

load_dotenv(PROJECT_ROOT / ".env")

DASHBOARD_CONFIG_PATH: Path = resolve_repo_path(
    os.getenv("DASHBOARD_CONFIG"), PROJECT_ROOT, PROJECT_ROOT / "dashboard.yaml"
)

# ------ Analytics service -------
ANALYTICS_API_URL: str = os.getenv("ANALYTICS_API_URL", "http://localhost:8080")
ANALYTICS_ENDPOINT: str = "/api/analytics"
ANALYTICS_TIMEOUT_S: float = 10.0   # matches the service's own handler timeout

# ------ Display -------
THOUSANDS_SEPARATOR: str = ","
FETCH_FALLBACK_MESSAGE: str = "Failed to load analytics"
LOADING_LABEL: str = "Loading analytics..."
WARNING_PREFIX: str = "⚠️"

# ------ Logging -------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
