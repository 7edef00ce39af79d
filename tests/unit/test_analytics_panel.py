"""Tests for the analytics dashboard panel state and render decision."""

import asyncio
from unittest.mock import MagicMock

import pytest

from dashboard.components import analytics
from dashboard.components.analytics import (
    AnalyticsView,
    ViewState,
    DASHBOARD,
    ERROR,
    LOADING,
    apply_failure,
    apply_success,
    effective_snapshot,
    failure_message,
    render_decision,
    render_panel,
)
from service.analytics_client import FetchFailure
from tests.helpers import make_fetch, make_gated_fetch


def _card_values(view):
    return {card.key: card.value for card in view.cards}


async def test_mount_shows_loading_until_fetch_resolves(sample_snapshot):
    """Before the fetch completes only the loading view is rendered."""
    fetch = make_gated_fetch(sample_snapshot)
    view = AnalyticsView(fetch)

    task = view.mount()
    await asyncio.sleep(0)

    assert view.state == ViewState(snapshot=None, is_loading=True, error_message=None)
    decision = render_decision(view.state)
    assert decision.kind == LOADING
    assert decision.message == "Loading analytics..."
    assert decision.cards == ()

    fetch.gate.set()
    await task
    assert render_decision(view.state).kind == DASHBOARD


async def test_success_renders_formatted_cards(sample_snapshot):
    view = AnalyticsView(make_fetch(sample_snapshot))
    await view.mount()

    assert view.state.snapshot == sample_snapshot
    assert view.state.is_loading is False
    assert view.state.error_message is None

    decision = render_decision(view.state)
    assert decision.kind == DASHBOARD
    assert _card_values(decision) == {"unique_users": "250", "total_visits": "1,000"}
    assert [card.label for card in decision.cards] == ["Unique Users", "Total Visits"]


async def test_failure_without_data_shows_error():
    view = AnalyticsView(make_fetch(FetchFailure("network down")))
    await view.mount()

    assert view.state.snapshot is None
    assert view.state.is_loading is False
    assert view.state.error_message == "network down"

    decision = render_decision(view.state)
    assert decision.kind == ERROR
    assert "network down" in decision.message
    assert decision.message.startswith("⚠️")
    assert decision.cards == ()


async def test_failure_without_message_uses_fallback():
    view = AnalyticsView(make_fetch(FetchFailure()))
    await view.mount()

    assert view.state.error_message == "Failed to load analytics"
    assert render_decision(view.state).message == "⚠️ Failed to load analytics"


async def test_unexpected_exception_is_contained():
    view = AnalyticsView(make_fetch(RuntimeError("boom")))
    task = view.mount()
    await task

    assert task.exception() is None
    assert view.state.error_message == "boom"


async def test_failed_refresh_keeps_last_good_data(sample_snapshot):
    """A failing reload after a successful load leaves the dashboard as it was."""
    view = AnalyticsView(make_fetch(sample_snapshot, FetchFailure("network down")))
    await view.mount()
    before = render_decision(view.state)

    await view.refresh()

    assert view.state.snapshot == sample_snapshot
    assert view.state.error_message == "network down"
    after = render_decision(view.state)
    assert after.kind == DASHBOARD
    assert after == before


async def test_refresh_replaces_data_on_success(sample_snapshot):
    newer = dict(sample_snapshot, unique_users=300)
    view = AnalyticsView(make_fetch(sample_snapshot, newer))
    await view.mount()
    await view.refresh()

    assert _card_values(render_decision(view.state))["unique_users"] == "300"


async def test_refresh_with_data_never_shows_loading(sample_snapshot):
    fetch_calls = []

    async def fetch():
        fetch_calls.append(1)
        if len(fetch_calls) > 1:
            await gate.wait()
        return sample_snapshot

    gate = asyncio.Event()
    view = AnalyticsView(fetch)
    await view.mount()

    task = view.refresh()
    await asyncio.sleep(0)
    assert view.state.is_loading is True
    assert render_decision(view.state).kind == DASHBOARD

    gate.set()
    await task
    assert view.state.is_loading is False


async def test_refresh_clears_previous_error_while_loading():
    view = AnalyticsView(make_fetch(FetchFailure("down"), FetchFailure("still down")))
    await view.mount()
    assert view.state.error_message == "down"

    seen = []
    view.subscribe(seen.append)
    await view.refresh()

    assert seen[0] == ViewState(snapshot=None, is_loading=True, error_message=None)
    assert seen[-1].error_message == "still down"


async def test_mount_fetches_only_once(sample_snapshot):
    fetch = make_fetch(sample_snapshot)
    view = AnalyticsView(fetch)
    await view.mount()

    assert view.mount() is None
    render_decision(view.state)
    render_decision(view.state)
    assert fetch.calls == 1


async def test_refresh_refused_while_fetch_in_flight(sample_snapshot):
    fetch = make_gated_fetch(sample_snapshot)
    view = AnalyticsView(fetch)
    task = view.mount()

    assert view.in_flight
    assert view.refresh() is None

    fetch.gate.set()
    await task
    assert not view.in_flight


async def test_result_after_unmount_is_ignored(sample_snapshot):
    fetch = make_gated_fetch(sample_snapshot)
    view = AnalyticsView(fetch)
    listener = MagicMock()
    view.subscribe(listener)

    task = view.mount()
    view.unmount()
    fetch.gate.set()
    await task

    assert task.exception() is None
    assert view.state == ViewState()
    listener.assert_not_called()
    assert view.refresh() is None


async def test_listeners_notified_and_unsubscribed(sample_snapshot):
    view = AnalyticsView(make_fetch(sample_snapshot, sample_snapshot))
    seen = []
    unsubscribe = view.subscribe(seen.append)

    await view.mount()
    assert seen == [view.state]

    unsubscribe()
    await view.refresh()
    assert len(seen) == 1


def test_missing_endpoint_stats_defaults_to_empty():
    state = apply_success(ViewState(), {"total_visits": 3, "unique_users": 2, "api_hits": 1})

    decision = render_decision(state)
    assert decision.kind == DASHBOARD
    assert effective_snapshot(state.snapshot)["endpoint_stats"] == {}
    assert "endpoint_stats" not in state.snapshot


def test_missing_or_null_counts_display_zero():
    state = apply_success(ViewState(), {"unique_users": None})

    assert _card_values(render_decision(state)) == {"unique_users": "0", "total_visits": "0"}


def test_dashboard_with_zeros_when_idle_without_data():
    """Not loading, no error, no data: the dashboard renders default zeros."""
    state = ViewState(snapshot=None, is_loading=False, error_message=None)

    decision = render_decision(state)
    assert decision.kind == DASHBOARD
    assert _card_values(decision) == {"unique_users": "0", "total_visits": "0"}


def test_render_decision_is_repeatable(sample_snapshot):
    state = apply_success(ViewState(), sample_snapshot)

    first = render_decision(state)
    second = render_decision(state)
    assert first == second
    assert state.snapshot == sample_snapshot


def test_apply_failure_keeps_snapshot(sample_snapshot):
    state = apply_success(ViewState(), sample_snapshot)
    failed = apply_failure(state, FetchFailure("timeout"))

    assert failed.snapshot == sample_snapshot
    assert failed.error_message == "timeout"
    assert failed.is_loading is False


@pytest.mark.parametrize("exc, expected", [
    (FetchFailure("bad gateway"), "bad gateway"),
    (FetchFailure(None), "Failed to load analytics"),
    (FetchFailure(""), "Failed to load analytics"),
    (ValueError("oops"), "oops"),
    (Exception(), "Failed to load analytics"),
])
def test_failure_message(exc, expected):
    assert failure_message(exc) == expected


@pytest.fixture
def mock_st(monkeypatch):
    fake = MagicMock()
    fake.columns.side_effect = lambda n: [MagicMock() for _ in range(n)]
    monkeypatch.setattr(analytics, "st", fake)
    monkeypatch.setattr("dashboard.components.layout.st", fake)
    return fake


def test_render_panel_loading(mock_st):
    result = render_panel(ViewState())

    assert result == {"status": "loading"}
    emitted = "\n".join(call.args[0] for call in mock_st.markdown.call_args_list)
    assert "Loading analytics..." in emitted
    assert '<div class="spinner">' in emitted
    assert ".analytics-loading .spinner" in emitted
    assert "@keyframes analytics-spin" in emitted
    mock_st.metric.assert_not_called()


def test_render_panel_error(mock_st):
    state = ViewState(is_loading=False, error_message="network down")
    result = render_panel(state)

    assert result == {"status": "error", "message": "network down"}
    mock_st.error.assert_called_once_with("⚠️ network down")
    mock_st.metric.assert_not_called()


def test_render_panel_dashboard(mock_st, sample_snapshot):
    state = apply_success(ViewState(), dict(sample_snapshot, last_updated="2024-01-15T10:30:00Z"))
    placeholder = MagicMock()
    result = render_panel(state, placeholder)

    placeholder.container.assert_called_once()
    assert result["status"] == "success"
    assert result["cards_count"] == 2
    assert result["has_data"] is True
    values = [call.kwargs["value"] for call in mock_st.metric.call_args_list]
    assert values == ["250", "1,000"]
    mock_st.error.assert_not_called()
    mock_st.caption.assert_called_once_with("📅 Last updated: 2024-01-15T10:30:00Z")


@pytest.mark.parametrize("result", [None, [1, 2], "250"])
async def test_non_mapping_result_is_a_failure(result):
    """A fetch that resolves to something other than a mapping ends loading with an error."""
    view = AnalyticsView(make_fetch(result))
    task = view.mount()
    await task

    assert task.exception() is None
    assert view.state.is_loading is False
    assert view.state.snapshot is None
    assert view.state.error_message.startswith("Invalid analytics payload")
    assert render_decision(view.state).kind == ERROR


async def test_non_mapping_refresh_keeps_last_good_data(sample_snapshot):
    view = AnalyticsView(make_fetch(sample_snapshot, None))
    await view.mount()
    await view.refresh()

    assert view.state.snapshot == sample_snapshot
    assert view.state.is_loading is False
    assert render_decision(view.state).kind == DASHBOARD


def test_render_decision_uses_given_separator():
    state = apply_success(ViewState(), {"unique_users": 1234567, "total_visits": 1000})

    decision = render_decision(state, separator=".")
    assert _card_values(decision) == {"unique_users": "1.234.567", "total_visits": "1.000"}


def test_render_panel_passes_separator(mock_st):
    state = apply_success(ViewState(), {"unique_users": 250, "total_visits": 1000})
    render_panel(state, separator=" ")

    values = [call.kwargs["value"] for call in mock_st.metric.call_args_list]
    assert values == ["250", "1 000"]
