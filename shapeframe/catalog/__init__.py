"""
ShapeFrame Catalog Module

Field enumeration, type inference and aggregation naming conventions.
"""

from shapeframe.catalog.aggregations import (
    AggregationConvention,
    AggregationRegistry,
    get_registry,
    register_aggregation,
)
from shapeframe.catalog.field_catalog import CatalogEntry, FieldCatalog, infer_column_type

__all__ = [
    "AggregationConvention",
    "AggregationRegistry",
    "CatalogEntry",
    "FieldCatalog",
    "get_registry",
    "infer_column_type",
    "register_aggregation",
]
