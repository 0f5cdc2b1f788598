"""
ShapeFrame Core Module

Core API, data model, options, protocols and exceptions.
"""

from shapeframe.core.exceptions import (
    FrameShapeError,
    QueryError,
    ResultFormatError,
    ShapeFrameError,
)
from shapeframe.core.frame import Column, ColumnType, Frame, VisualizationHint
from shapeframe.core.result import ResultSet, Row
from shapeframe.core.options import FormatOptions
from shapeframe.core.interfaces import QueryExecutor
from shapeframe.core.builder import FrameBuilder
from shapeframe.core.api import catalog_fields, classify_results, format_results

__all__ = [
    # Protocols
    "QueryExecutor",
    # Classes
    "Column",
    "ColumnType",
    "Frame",
    "FrameBuilder",
    "FormatOptions",
    "ResultSet",
    "Row",
    "VisualizationHint",
    # Functions
    "catalog_fields",
    "classify_results",
    "format_results",
    # Exceptions
    "ShapeFrameError",
    "QueryError",
    "FrameShapeError",
    "ResultFormatError",
]
