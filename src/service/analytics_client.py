"""Async client for the analytics summary endpoint.

Provides the ``fetch_analytics()`` operation consumed by the dashboard:
- GET ``{base_url}/api/analytics`` via httpx.AsyncClient
- Service error bodies ({"error": ..., "details": ...}) become FetchFailure
- Payloads are validated; absent fields stay absent
"""

from typing import Any, Dict, Optional

import httpx

from config.config import ANALYTICS_API_URL, ANALYTICS_ENDPOINT, ANALYTICS_TIMEOUT_S
from config.schemas import AnalyticsSnapshot, COUNT_FIELDS
from utils.logging import get_logger
from utils.validation import summarize_problems, validate_count, validate_endpoint_stats

logger = get_logger(__name__)


class FetchFailure(Exception):
    """Raised when the analytics summary could not be retrieved."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(*([message] if message else []))
        self.message = message or None


def parse_snapshot(payload: Any) -> AnalyticsSnapshot:
    """Validate a decoded JSON body and return it as an AnalyticsSnapshot.

    Only keys present in ``payload`` are copied, so a missing field stays
    missing rather than turning into zero. Unknown keys are dropped.
    """
    if not isinstance(payload, dict):
        raise FetchFailure("Invalid analytics payload")

    snapshot: AnalyticsSnapshot = {}
    problems: Dict[str, str] = {}

    for field in COUNT_FIELDS:
        if field not in payload:
            continue
        problem = validate_count(field, payload[field])
        if problem:
            problems[field] = problem
        else:
            snapshot[field] = payload[field]

    if "endpoint_stats" in payload and payload["endpoint_stats"] is not None:
        problem = validate_endpoint_stats(payload["endpoint_stats"])
        if problem:
            problems["endpoint_stats"] = problem
        else:
            snapshot["endpoint_stats"] = dict(payload["endpoint_stats"])

    last_updated = payload.get("last_updated")
    if isinstance(last_updated, str) and last_updated:
        snapshot["last_updated"] = last_updated

    if problems:
        raise FetchFailure(f"Invalid analytics payload: {summarize_problems(problems)}")
    return snapshot


def _error_message(response: httpx.Response) -> str:
    """Pick the most descriptive message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("details", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"HTTP {response.status_code}"


class AnalyticsClient:
    """Fetches the analytics summary from the remote service."""

    def __init__(
        self,
        base_url: str = ANALYTICS_API_URL,
        timeout: float = ANALYTICS_TIMEOUT_S,
        endpoint: str = ANALYTICS_ENDPOINT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = base_url.rstrip("/") + endpoint
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)

    async def fetch_analytics(self) -> AnalyticsSnapshot:
        """Return the current summary or raise FetchFailure."""
        try:
            response = await self._http.get(self.url)
        except httpx.HTTPError as e:
            logger.warning("Analytics request to %s failed: %s", self.url, e)
            raise FetchFailure(str(e) or None) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning("Analytics service returned %s: %s", response.status_code, message)
            raise FetchFailure(message)

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchFailure("Invalid analytics payload") from e

        snapshot = parse_snapshot(payload)
        logger.debug("Fetched analytics summary with fields %s", sorted(snapshot))
        return snapshot

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "AnalyticsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def make_fetcher(
    base_url: str = ANALYTICS_API_URL,
    timeout: float = ANALYTICS_TIMEOUT_S,
    endpoint: str = ANALYTICS_ENDPOINT,
):
    """Return a no-argument coroutine function that fetches one summary.

    A fresh client is opened per call so the fetch is not tied to the event
    loop of a previous call.
    """
    async def fetch_analytics() -> AnalyticsSnapshot:
        async with AnalyticsClient(base_url, timeout, endpoint) as client:
            return await client.fetch_analytics()

    return fetch_analytics
