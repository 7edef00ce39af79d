"""Schema definitions for structured data used in the project."""

from typing import TypedDict, Dict, Optional, Union


EndpointStat = Union[int, Dict[str, int]]


class AnalyticsSnapshot(TypedDict, total=False):
    total_visits: Optional[int]
    unique_users: Optional[int]
    api_hits: Optional[int]
    endpoint_stats: Dict[str, EndpointStat]  # endpoint -> hit count or stats record
    last_updated: str  # ISO8601, set by the service at aggregation time


COUNT_FIELDS = ("total_visits", "unique_users", "api_hits")

EMPTY_SNAPSHOT: AnalyticsSnapshot = {
    "total_visits": 0,
    "unique_users": 0,
    "api_hits": 0,
    "endpoint_stats": {},
}
