"""
ShapeFrame Test Configuration

Shared pytest fixtures for all tests.
"""

from datetime import datetime, timezone

import pytest

from shapeframe.core.options import FormatOptions
from shapeframe.core.result import ResultSet


@pytest.fixture
def fixed_now():
    """Deterministic "now" for time fallbacks"""
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def options(fixed_now):
    """FormatOptions pinned to fixed_now"""
    return FormatOptions(now=fixed_now)


@pytest.fixture
def simple_count_results():
    """SELECT count(*) FROM Transaction"""
    return ResultSet(rows=[{"count": 42.0}])


@pytest.fixture
def faceted_count_results():
    """SELECT count(*) FROM Transaction FACET service"""
    return ResultSet(
        rows=[
            {"count": 42.0, "facet": ["s1"]},
            {"count": 24.0, "facet": ["s2"]},
        ],
        facets=["service"],
    )


@pytest.fixture
def faceted_timeseries_results():
    """SELECT sum(duration) FROM Transaction FACET appName TIMESERIES"""
    return ResultSet(
        rows=[
            {"beginTimeSeconds": 1700000000, "endTimeSeconds": 1700000060, "facet": ["web"], "sum.duration": 1.5},
            {"beginTimeSeconds": 1700000000, "endTimeSeconds": 1700000060, "facet": ["db"], "sum.duration": 0.25},
            {"beginTimeSeconds": 1700000060, "endTimeSeconds": 1700000120, "facet": ["web"], "sum.duration": 2.5},
            {"beginTimeSeconds": 1700000060, "endTimeSeconds": 1700000120, "facet": ["db"], "sum.duration": 0.75},
        ],
        facets=["appName"],
    )


@pytest.fixture
def percentile_rows():
    """Rows of SELECT percentile(duration, 50, 95, 99) with drifting keys"""
    return [
        {"timestamp": 1700000000000, "percentile.duration": {"50": 0.1, "95": 0.9}},
        {"timestamp": 1700000060000, "percentile.duration": {"50": 0.2, "99": 1.4}},
    ]
