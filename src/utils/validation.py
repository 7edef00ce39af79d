"""Validation utilities for analytics payloads."""

from typing import Any, Dict, Optional


def is_count(value: Any) -> bool:
    """True for non-negative integers; bools are rejected."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_count(name: str, value: Any) -> Optional[str]:
    """Return a problem description for a count field, or None if it is usable.

    ``None`` is accepted: a null count is kept as-is and defaulted at render time.
    """
    if value is None or is_count(value):
        return None
    return f"{name} must be a non-negative integer, got {value!r}"


def validate_endpoint_stats(stats: Any) -> Optional[str]:
    """Check an endpoint -> count (or stats record) mapping."""
    if not isinstance(stats, dict):
        return f"endpoint_stats must be a mapping, got {type(stats).__name__}"
    for endpoint, stat in stats.items():
        if not isinstance(endpoint, str):
            return f"endpoint_stats key {endpoint!r} is not a string"
        if isinstance(stat, dict):
            bad = [k for k, v in stat.items() if validate_count(f"{endpoint}.{k}", v)]
            if bad:
                return f"endpoint_stats[{endpoint!r}] has invalid fields: {', '.join(map(str, bad))}"
        elif not is_count(stat):
            return f"endpoint_stats[{endpoint!r}] must be a non-negative integer, got {stat!r}"
    return None


def summarize_problems(problems: Dict[str, str]) -> str:
    """Join field problems into a single human-readable line."""
    return "; ".join(problems[name] for name in sorted(problems))
