"""Test configuration and shared fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_data_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_snapshot():
    """Analytics summary as returned by the service."""
    return {
        "total_visits": 1000,
        "unique_users": 250,
        "api_hits": 5000,
        "endpoint_stats": {"/api/x": 10},
    }
