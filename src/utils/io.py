from pathlib import Path
from typing import Dict, Optional, Any

import yaml


def maybe_load_yaml(path: Optional[str | Path]) -> Dict[str, Any]:
    """Load YAML config file with fallback to empty dict."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
