"""
ShapeFrame - Turn schema-less analytics query results into visualization-ready frames

Classifies the shape of a result set from its content, infers a stable type
per column despite row-to-row drift, and splits faceted results into one
labelled series per facet value.

Quick Start:
    >>> import shapeframe as sf
    >>>
    >>> # Format a recorded NRDB payload
    >>> frames = sf.format_results({
    ...     "results": [
    ...         {"beginTimeSeconds": 1700000000, "facet": ["web"], "sum.duration": 1.5},
    ...         {"beginTimeSeconds": 1700000000, "facet": ["db"], "sum.duration": 0.4},
    ...     ],
    ...     "metadata": {"facets": ["appName"]},
    ... })
    >>> [f.name for f in frames]
    ['web', 'db']
    >>>
    >>> # Convert for analysis
    >>> df = frames[0].to_pandas()
    >>>
    >>> # Run queries through your own API client
    >>> runner = sf.QueryRunner(my_executor)
    >>> response = runner.run("SELECT count(*) FROM Transaction FACET appName")
"""

from shapeframe.core import (
    Column,
    ColumnType,
    # Exceptions
    FrameShapeError,
    FormatOptions,
    Frame,
    # Classes
    FrameBuilder,
    # Protocols
    QueryExecutor,
    QueryError,
    ResultFormatError,
    ResultSet,
    ShapeFrameError,
    VisualizationHint,
    # Functions
    catalog_fields,
    classify_results,
    format_results,
)
from shapeframe.catalog import FieldCatalog, register_aggregation
from shapeframe.query import QueryShape, ShapeKind, classify

__version__ = "0.1.0"

__all__ = [
    "Column",
    "ColumnType",
    "FieldCatalog",
    "FormatOptions",
    "Frame",
    "FrameBuilder",
    "FrameShapeError",
    "QueryError",
    "QueryExecutor",
    "QueryResponse",
    "QueryRunner",
    "QueryShape",
    "ResultFormatError",
    "ResultSet",
    "ShapeFrameError",
    "ShapeKind",
    "VisualizationHint",
    "__version__",
    "catalog_fields",
    "classify",
    "classify_results",
    "format_results",
    "load_result_set",
    "register_aggregation",
    "write_frames",
]


# Lazy imports for the runner and file I/O (keeps the core import light)
def __getattr__(name):
    if name == "QueryRunner":
        from shapeframe.query.runner import QueryRunner

        return QueryRunner
    elif name == "QueryResponse":
        from shapeframe.query.runner import QueryResponse

        return QueryResponse
    elif name == "load_result_set":
        from shapeframe.io.json_results import load_result_set

        return load_result_set
    elif name == "write_frames":
        from shapeframe.io.arrow_frames import write_frames

        return write_frames
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
