"""Dashboard package namespace.

This package contains the analytics panel and its layout helpers. The panel
keeps its state in a plain `AnalyticsView` container and exposes a pure
`render_decision()` so the Streamlit layer only draws what it is given.
"""
