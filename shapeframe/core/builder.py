"""
Frame builder - orchestrates classification, cataloguing and grouping

Turns one result set into the frames a visualization layer renders.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Sequence

from shapeframe.catalog.aggregations import AggregationRegistry
from shapeframe.catalog.field_catalog import FieldCatalog
from shapeframe.core.fields import (
    COUNT_FIELD,
    COUNT_FRAME_NAME,
    COUNT_TIME_SERIES_FRAME_NAME,
    DEFAULT_DIMENSION,
    FACET_TABLE_FRAME_NAME,
    STANDARD_FRAME_NAME,
    TIME_COLUMN,
)
from shapeframe.core.frame import Column, ColumnType, Frame, VisualizationHint
from shapeframe.core.options import FormatOptions
from shapeframe.core.result import ResultSet
from shapeframe.core.timeseries import count_time_span, time_column
from shapeframe.core.values import as_number
from shapeframe.query.classifier import QueryShape, ShapeKind, classify
from shapeframe.query.grouping import facet_key, facet_values, group_by_facet

logger = logging.getLogger(__name__)


class FrameBuilder:
    """
    Builds frames from result sets

    One builder can format any number of result sets; it keeps no state
    between calls besides its options.

    Attributes:
        options: Formatting options
        registry: Aggregation conventions used for type inference (global
            registry when None)

    Examples:
        >>> builder = FrameBuilder()
        >>> frames = builder.build(ResultSet(rows=[{"count": 42.0}]))
        >>> [f.name for f in frames]
        ['count', 'count_time_series']
    """

    def __init__(
        self,
        options: FormatOptions | None = None,
        registry: AggregationRegistry | None = None,
    ):
        self.options = options or FormatOptions()
        self.registry = registry

    def build(self, result_set: ResultSet, shape: QueryShape | None = None) -> list[Frame]:
        """
        Build frames for a result set

        Args:
            result_set: Rows and grouping metadata of one query
            shape: Pre-computed classification (classified here when None)

        Returns:
            Frames in presentation order; empty for an empty result set
        """
        shape = shape or classify(result_set)
        now = self.options.resolve_now()

        if shape.kind is ShapeKind.EMPTY:
            frames: list[Frame] = []
        elif shape.kind is ShapeKind.SIMPLE_COUNT:
            frames = self._simple_count(result_set, shape, now)
        elif shape.kind is ShapeKind.FACETED_COUNT:
            frames = self._faceted_count(result_set, shape, now)
        elif shape.kind is ShapeKind.FACETED_AGGREGATION_TIMESERIES:
            frames = self._faceted_timeseries(result_set, shape, now)
        else:
            frames = self._standard(result_set, shape, now)

        logger.debug("Built %d frames for %s result set", len(frames), shape.kind.value)
        return frames

    def _meta(self, shape: QueryShape) -> dict[str, Any]:
        meta: dict[str, Any] = {"shape": shape.kind.value}
        if shape.dimension:
            meta["dimension"] = shape.dimension
        return meta

    def _catalog(self, rows: Sequence[Mapping[str, Any]]) -> FieldCatalog:
        return FieldCatalog.from_rows(rows, sort_fields=self.options.sort_fields, registry=self.registry)

    def _simple_count(self, result_set: ResultSet, shape: QueryShape, now: datetime) -> list[Frame]:
        count = as_number(result_set.rows[0].get(COUNT_FIELD))
        start, end = count_time_span(self.options.time_range, now)

        value_frame = Frame(
            COUNT_FRAME_NAME,
            [Column(COUNT_FIELD, ColumnType.NUMBER, [count])],
            VisualizationHint.TABLE,
            self._meta(shape),
        )
        # Two points so time-series panels can draw a line
        graph_frame = Frame(
            COUNT_TIME_SERIES_FRAME_NAME,
            [
                Column(TIME_COLUMN, ColumnType.TIMESTAMP, [start, end]),
                Column(COUNT_FIELD, ColumnType.NUMBER, [count, count]),
            ],
            VisualizationHint.GRAPH,
            self._meta(shape),
        )
        return [value_frame, graph_frame]

    def _faceted_count(self, result_set: ResultSet, shape: QueryShape, now: datetime) -> list[Frame]:
        dimension = shape.dimension or DEFAULT_DIMENSION
        default = self.options.default_instant(now)
        groups = group_by_facet(result_set.rows)

        frames = []
        if self.options.include_facet_table:
            grouped_rows = [row for row in result_set.rows if facet_key(row) is not None]
            frames.append(self._facet_table(result_set, grouped_rows, shape))

        for key, rows in groups.items():
            labels = {dimension: key}
            counts = [as_number(row.get(COUNT_FIELD)) for row in rows]
            frames.append(
                Frame(
                    key,
                    [
                        time_column(rows, default),
                        Column(COUNT_FIELD, ColumnType.NUMBER, counts, labels),
                    ],
                    VisualizationHint.GRAPH,
                    self._meta(shape),
                )
            )
        return frames

    def _facet_table(
        self,
        result_set: ResultSet,
        rows: Sequence[Mapping[str, Any]],
        shape: QueryShape,
    ) -> Frame:
        dimensions = result_set.facets or [DEFAULT_DIMENSION]
        per_row = [facet_values(row, dimensions) for row in rows]
        columns = [
            Column(name, ColumnType.STRING, [values[name] for values in per_row])
            for name in dimensions
        ]
        columns.append(
            Column(COUNT_FIELD, ColumnType.NUMBER, [as_number(row.get(COUNT_FIELD)) for row in rows])
        )
        return Frame(FACET_TABLE_FRAME_NAME, columns, VisualizationHint.TABLE, self._meta(shape))

    def _faceted_timeseries(
        self, result_set: ResultSet, shape: QueryShape, now: datetime
    ) -> list[Frame]:
        dimension = shape.dimension or DEFAULT_DIMENSION
        default = self.options.default_instant(now)
        # Catalogued over every row so all groups share one set of columns;
        # grouping attributes are carried by the labels instead
        catalog = self._catalog(result_set.rows).without(dimension, *result_set.facets)
        groups = group_by_facet(result_set.rows)

        frames = []
        for key, rows in groups.items():
            columns = [time_column(rows, default)]
            columns.extend(catalog.project(rows, labels={dimension: key}))
            frames.append(Frame(key, columns, VisualizationHint.GRAPH, self._meta(shape)))
        return frames

    def _standard(self, result_set: ResultSet, shape: QueryShape, now: datetime) -> list[Frame]:
        rows = result_set.rows
        columns = [time_column(rows, self.options.default_instant(now))]
        catalog = self._catalog(rows)

        if any(facet_key(row) is not None for row in rows):
            dimensions = result_set.facets or [DEFAULT_DIMENSION]
            per_row = [facet_values(row, dimensions) for row in rows]
            columns.extend(
                Column(name, ColumnType.STRING, [values[name] for values in per_row])
                for name in dimensions
            )
            # Facet columns replace same-named row attributes
            catalog = catalog.without(*dimensions)

        columns.extend(catalog.project(rows))
        visualization = self.options.visualization or VisualizationHint.GRAPH
        return [Frame(STANDARD_FRAME_NAME, columns, visualization, self._meta(shape))]
