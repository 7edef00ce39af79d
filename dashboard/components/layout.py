"""
Shared layout helpers for dashboard components.

Provides common UI utilities for number formatting, metric cards, and styling.
"""

from typing import Optional
import streamlit as st

from config.config import THOUSANDS_SEPARATOR


def format_count(value: Optional[int], separator: str = THOUSANDS_SEPARATOR) -> str:
    """
    Format a count with thousands separators.

    Args:
        value: Count to display; None displays as "0"
        separator: Grouping character (e.g. "," for en-US, "." for de-DE)

    Returns:
        Formatted string, e.g. 1000 -> "1,000"
    """
    if value is None:
        return "0"
    return f"{value:,}".replace(",", separator)


def render_metric_card(label: str, value: str, icon: Optional[str] = None) -> None:
    """
    Render a single analytics metric card.

    Args:
        label: Metric label/title
        value: Pre-formatted metric value
        icon: Optional emoji shown before the label
    """
    st.metric(
        label=f"{icon} {label}" if icon else label,
        value=value,
    )


def render_spinner(label: str) -> None:
    """Render the CSS spinner with a caption underneath."""
    st.markdown(
        f'<div class="analytics-loading"><div class="spinner"></div><p>{label}</p></div>',
        unsafe_allow_html=True,
    )


def apply_custom_css() -> None:
    """Apply custom CSS styling for the analytics cards."""
    st.markdown("""
    <style>
    .stMetric {
        background-color: #f0f2f6;
        border: 1px solid #e6e9ef;
        padding: 0.5rem;
        border-radius: 0.25rem;
    }

    .analytics-loading {
        display: flex;
        flex-direction: column;
        align-items: center;
        padding: 2rem 0;
    }

    .analytics-loading .spinner {
        width: 2rem;
        height: 2rem;
        border: 3px solid #e6e9ef;
        border-top-color: #4a6cf7;
        border-radius: 50%;
        animation: analytics-spin 0.8s linear infinite;
    }

    @keyframes analytics-spin {
        to { transform: rotate(360deg); }
    }
    </style>
    """, unsafe_allow_html=True)
