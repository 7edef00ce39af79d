"""
Analytics summary panel component.

Fetches the analytics summary once when mounted and shows it as metric cards.
Use `AnalyticsView` to hold the panel state and `render_panel()` to draw it.

Render precedence:
- loading view only while the first fetch is outstanding and no data exists
- error view only when the fetch failed and no data exists
- dashboard otherwise; once a snapshot exists it stays on screen, and later
  failures only update `error_message`
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

import streamlit as st

from config.config import FETCH_FALLBACK_MESSAGE, LOADING_LABEL, THOUSANDS_SEPARATOR, WARNING_PREFIX
from config.schemas import AnalyticsSnapshot, EMPTY_SNAPSHOT
from dashboard.components.layout import (
    format_count,
    render_metric_card,
    render_spinner,
    apply_custom_css,
)
from utils.logging import get_logger

logger = get_logger(__name__)

LOADING = "loading"
ERROR = "error"
DASHBOARD = "dashboard"

# (field, label, icon) in display order; api_hits and endpoint_stats are kept
# in state but not shown as cards.
TRACKED_METRICS: Tuple[Tuple[str, str, str], ...] = (
    ("unique_users", "Unique Users", "👥"),
    ("total_visits", "Total Visits", "🌐"),
)

FetchOperation = Callable[[], Awaitable[AnalyticsSnapshot]]


@dataclass(frozen=True)
class ViewState:
    snapshot: Optional[AnalyticsSnapshot] = None
    is_loading: bool = True
    error_message: Optional[str] = None


@dataclass(frozen=True)
class MetricCard:
    key: str
    label: str
    icon: str
    value: str


@dataclass(frozen=True)
class RenderedView:
    kind: str
    message: Optional[str] = None
    cards: Tuple[MetricCard, ...] = ()
    last_updated: Optional[str] = None


Listener = Callable[[ViewState], None]


def failure_message(exc: BaseException) -> str:
    """Human-readable text for a failed fetch, with a generic fallback."""
    message = getattr(exc, "message", None)
    if not isinstance(message, str) or not message:
        message = str(exc)
    return message or FETCH_FALLBACK_MESSAGE


def apply_success(state: ViewState, payload: AnalyticsSnapshot) -> ViewState:
    return replace(state, snapshot=dict(payload), error_message=None, is_loading=False)


def apply_failure(state: ViewState, exc: BaseException) -> ViewState:
    # snapshot is left as-is so previously shown numbers survive a failed reload
    return replace(state, error_message=failure_message(exc), is_loading=False)


def effective_snapshot(snapshot: Optional[AnalyticsSnapshot]) -> AnalyticsSnapshot:
    """Snapshot used for display: the fetched one, or all-zero defaults."""
    if snapshot is None:
        return dict(EMPTY_SNAPSHOT, endpoint_stats={})
    effective = dict(snapshot)
    if effective.get("endpoint_stats") is None:
        effective["endpoint_stats"] = {}
    return effective


def render_decision(state: ViewState, separator: str = THOUSANDS_SEPARATOR) -> RenderedView:
    """Map (is_loading, error_message, snapshot) to the view to show."""
    if state.is_loading and state.snapshot is None:
        return RenderedView(kind=LOADING, message=LOADING_LABEL)

    if state.error_message is not None and state.snapshot is None:
        return RenderedView(kind=ERROR, message=f"{WARNING_PREFIX} {state.error_message}")

    data = effective_snapshot(state.snapshot)
    cards = tuple(
        MetricCard(key=key, label=label, icon=icon, value=format_count(data.get(key), separator))
        for key, label, icon in TRACKED_METRICS
    )
    return RenderedView(kind=DASHBOARD, cards=cards, last_updated=data.get("last_updated"))


class AnalyticsView:
    """State container for the analytics panel.

    Fetches once on `mount()`, applies the success/failure transition when the
    fetch completes, and notifies subscribers with the new state. Results that
    arrive after `unmount()` are dropped.
    """

    def __init__(self, fetch: FetchOperation):
        self._fetch = fetch
        self.state = ViewState()
        self._listeners: List[Listener] = []
        self._task: Optional[asyncio.Task] = None
        self._mounted = False
        self._unmounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted and not self._unmounted

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def mount(self) -> Optional[asyncio.Task]:
        """Start the one fetch for this mount. Must run inside an event loop."""
        if self._mounted or self._unmounted:
            return None
        self._mounted = True
        self.state = ViewState()
        return self._start()

    def refresh(self) -> Optional[asyncio.Task]:
        """User-requested reload; refused while a fetch is outstanding."""
        if not self.mounted or self.in_flight:
            return None
        self._set_state(replace(self.state, is_loading=True, error_message=None))
        return self._start()

    def unmount(self) -> None:
        self._unmounted = True
        self._listeners.clear()

    def _start(self) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._load())
        return self._task

    async def _load(self) -> None:
        try:
            payload = await self._fetch()
            if not isinstance(payload, Mapping):
                raise TypeError(
                    f"Invalid analytics payload: expected a mapping, got {type(payload).__name__}"
                )
        except Exception as e:
            logger.warning("Analytics fetch failed: %s", failure_message(e))
            self._complete(apply_failure, e)
        else:
            logger.debug("Analytics fetch succeeded")
            self._complete(apply_success, payload)

    def _complete(self, transition: Callable[[ViewState, Any], ViewState], result: Any) -> None:
        if self._unmounted:
            logger.debug("Dropping analytics result for unmounted view")
            return
        self._set_state(transition(self.state, result))

    def _set_state(self, state: ViewState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)


def render_panel(
    state: ViewState,
    placeholder: Optional[Any] = None,
    separator: str = THOUSANDS_SEPARATOR,
) -> Dict[str, Any]:
    """
    Render the analytics panel for the given state.

    Args:
        state: Current view state
        placeholder: Optional `st.empty()` slot; its previous content is replaced
        separator: Thousands separator for card values

    Returns:
        Dict containing panel status for external monitoring.
    """
    view = render_decision(state, separator)
    target = placeholder.container() if placeholder is not None else st.container()

    with target:
        apply_custom_css()
        if view.kind == LOADING:
            render_spinner(view.message)
            return {"status": "loading"}

        if view.kind == ERROR:
            st.error(view.message)
            return {"status": "error", "message": state.error_message}

        columns = st.columns(len(view.cards))
        for column, card in zip(columns, view.cards):
            with column:
                render_metric_card(card.label, card.value, icon=card.icon)

        if view.last_updated:
            st.caption(f"📅 Last updated: {view.last_updated}")

    return {
        "status": "success",
        "cards_count": len(view.cards),
        "has_data": state.snapshot is not None,
        "stale_error": state.error_message,
    }
