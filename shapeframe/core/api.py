"""
ShapeFrame public API

High-level functions for turning raw query results into frames.
"""

from __future__ import annotations

from typing import Any, Mapping

from shapeframe.catalog.field_catalog import FieldCatalog
from shapeframe.core.builder import FrameBuilder
from shapeframe.core.frame import Frame
from shapeframe.core.options import FormatOptions
from shapeframe.core.result import ResultSet
from shapeframe.query.classifier import QueryShape, classify


def _as_result_set(results: ResultSet | Mapping[str, Any] | list) -> ResultSet:
    if isinstance(results, ResultSet):
        return results
    return ResultSet.from_dict(results)


def format_results(
    results: ResultSet | Mapping[str, Any] | list,
    options: FormatOptions | None = None,
    **kwargs: Any,
) -> list[Frame]:
    """
    Format query results as frames

    Args:
        results: ResultSet, or a decoded JSON payload
            (``{"results": [...], "metadata": {"facets": [...]}}`` or a list of rows)
        options: Formatting options
        **kwargs: FormatOptions fields, used when ``options`` is None

    Returns:
        List of Frames (empty when there are no rows)

    Examples:
        >>> import shapeframe as sf
        >>> frames = sf.format_results({
        ...     "results": [
        ...         {"count": 42.0, "facet": ["s1"]},
        ...         {"count": 24.0, "facet": ["s2"]},
        ...     ],
        ...     "metadata": {"facets": ["service"]},
        ... })
        >>> [f.column("count").labels for f in frames]
        [{'service': 's1'}, {'service': 's2'}]
    """
    if options is None:
        options = FormatOptions(**kwargs)
    return FrameBuilder(options).build(_as_result_set(results))


def classify_results(results: ResultSet | Mapping[str, Any] | list) -> QueryShape:
    """
    Classify the shape of query results without building frames

    Examples:
        >>> classify_results([{"count": 42.0}]).kind.value
        'simple_count'
    """
    return classify(_as_result_set(results))


def catalog_fields(
    results: ResultSet | Mapping[str, Any] | list, sort_fields: bool = False
) -> FieldCatalog:
    """
    Catalogue the data fields of query results

    Examples:
        >>> catalog_fields([{"value": 10.0}, {"value": "oops"}]).types()
        {'value': <ColumnType.NUMBER: 'number'>}
    """
    return FieldCatalog.from_rows(_as_result_set(results).rows, sort_fields=sort_fields)
