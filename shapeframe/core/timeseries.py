"""
Row time derivation for graph frames.

Every row plotted on a graph needs an X coordinate, so these helpers never
return a missing time: rows without a usable ``timestamp`` or
``beginTimeSeconds`` fall back to a default instant.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Sequence

from shapeframe.core.fields import BEGIN_TIME_FIELD, TIME_COLUMN, TIMESTAMP_FIELD
from shapeframe.core.frame import Column, ColumnType
from shapeframe.core.values import TimeUnit, as_timestamp

logger = logging.getLogger(__name__)

# Span of the synthetic series drawn for a single count value
DEFAULT_COUNT_SPAN = timedelta(hours=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(instant: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def row_time(row: Mapping[str, Any], default: datetime) -> datetime:
    """
    Derive the plotted time of a row

    Prefers ``timestamp`` (epoch milliseconds), then ``beginTimeSeconds``
    (epoch seconds), then ``default``.
    """
    instant = as_timestamp(row.get(TIMESTAMP_FIELD), TimeUnit.MILLISECONDS)
    if instant is None:
        instant = as_timestamp(row.get(BEGIN_TIME_FIELD), TimeUnit.SECONDS)
    return instant if instant is not None else default


def time_column(rows: Sequence[Mapping[str, Any]], default: datetime) -> Column:
    """Time column with one non-null entry per row."""
    values = [row_time(row, default) for row in rows]
    fallback_count = sum(1 for v in values if v is default)
    if fallback_count:
        logger.debug("%d of %d rows use the default instant %s", fallback_count, len(rows), default)
    return Column(TIME_COLUMN, ColumnType.TIMESTAMP, values)


def count_time_span(
    time_range: tuple[datetime, datetime] | None, now: datetime
) -> tuple[datetime, datetime]:
    """
    Two instants bracketing a single count value

    Uses the caller's time range when given, otherwise the hour before ``now``.
    """
    if time_range is not None:
        start, end = time_range
        return ensure_utc(start), ensure_utc(end)
    return now - DEFAULT_COUNT_SPAN, now
