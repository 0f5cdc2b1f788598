"""
ShapeFrame Query Module

Shape classification and facet grouping. The query runner lives in
shapeframe.query.runner.
"""

from shapeframe.query.classifier import QueryShape, ShapeKind, classify
from shapeframe.query.grouping import facet_key, facet_values, group_by_facet

__all__ = [
    "QueryShape",
    "ShapeKind",
    "classify",
    "facet_key",
    "facet_values",
    "group_by_facet",
]
