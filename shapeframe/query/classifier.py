"""
Query shape classification

Decides how a result set should be laid out from its content alone. The query
text is never inspected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from shapeframe.core.fields import COUNT_FIELD, DEFAULT_DIMENSION, FACET_FIELD, TIMESERIES_MARKERS
from shapeframe.core.result import ResultSet
from shapeframe.query.grouping import facet_key

logger = logging.getLogger(__name__)


class ShapeKind(Enum):
    """Layouts a result set can take"""

    EMPTY = "empty"
    SIMPLE_COUNT = "simple_count"
    FACETED_AGGREGATION_TIMESERIES = "faceted_aggregation_timeseries"
    FACETED_COUNT = "faceted_count"
    STANDARD = "standard"


@dataclass(frozen=True)
class QueryShape:
    """
    Classified shape of a result set

    Attributes:
        kind: Layout to produce
        dimension: Grouping dimension for faceted kinds, None otherwise
    """

    kind: ShapeKind
    dimension: str | None = None

    @property
    def is_faceted(self) -> bool:
        return self.kind in (ShapeKind.FACETED_COUNT, ShapeKind.FACETED_AGGREGATION_TIMESERIES)


def has_count(row: Mapping[str, Any]) -> bool:
    return row.get(COUNT_FIELD) is not None


def has_timeseries_marker(row: Mapping[str, Any]) -> bool:
    return any(marker in row for marker in TIMESERIES_MARKERS)


def classify(result_set: ResultSet) -> QueryShape:
    """
    Classify a result set; first match wins

    1. EMPTY: no rows
    2. SIMPLE_COUNT: a single row with count, no facet field, no time markers
    3. FACETED_AGGREGATION_TIMESERIES: time markers plus facet values, with
       any aggregation field
    4. FACETED_COUNT: facet values and count, no time markers anywhere
    5. STANDARD: everything else

    Grouping metadata only names dimensions: a result set whose rows carry no
    usable facet value is never faceted, since grouping it would drop every row.

    Examples:
        >>> classify(ResultSet(rows=[{"count": 42.0}])).kind
        <ShapeKind.SIMPLE_COUNT: 'simple_count'>
    """
    rows = result_set.rows
    if not rows:
        return _decided(QueryShape(ShapeKind.EMPTY))

    if len(rows) == 1:
        row = rows[0]
        # Any facet value, even an empty list, rules out a simple count
        if has_count(row) and row.get(FACET_FIELD) is None and not has_timeseries_marker(row):
            return _decided(QueryShape(ShapeKind.SIMPLE_COUNT))

    faceted = any(facet_key(row) is not None for row in rows)
    if not faceted:
        return _decided(QueryShape(ShapeKind.STANDARD))

    dimension = result_set.primary_dimension or DEFAULT_DIMENSION
    if any(has_timeseries_marker(row) for row in rows):
        return _decided(QueryShape(ShapeKind.FACETED_AGGREGATION_TIMESERIES, dimension))

    if any(has_count(row) for row in rows):
        return _decided(QueryShape(ShapeKind.FACETED_COUNT, dimension))

    return _decided(QueryShape(ShapeKind.STANDARD))


def _decided(shape: QueryShape) -> QueryShape:
    logger.debug("Classified result set as %s (dimension=%s)", shape.kind.value, shape.dimension)
    return shape
