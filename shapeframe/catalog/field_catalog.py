"""
Field catalog - column enumeration and type inference

Enumerates the data fields present across a result set and infers one stable
column type per field, despite per-row type drift.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from shapeframe.catalog.aggregations import AggregationRegistry, get_registry
from shapeframe.core.fields import is_data_field
from shapeframe.core.frame import Column, ColumnType
from shapeframe.core.values import (
    TimeUnit,
    ValueKind,
    as_bool,
    as_display_text,
    as_number,
    as_timestamp,
    is_blank,
    kind_of,
    parse_numeric_string,
)

logger = logging.getLogger(__name__)

# Sampled types in resolution order: the first one observed wins
TYPE_PRIORITY = (
    ColumnType.NUMBER,
    ColumnType.STRING,
    ColumnType.ARRAY_AS_TEXT,
    ColumnType.OBJECT_AS_TEXT,
    ColumnType.BOOLEAN,
)


@dataclass
class CatalogEntry:
    """
    One catalogued field

    Attributes:
        name: Field name as it appears in rows
        column_type: Inferred output type
        percentile_keys: Expansion keys (PERCENTILE_EXPANSION only), in first
            appearance order across the whole result set
    """

    name: str
    column_type: ColumnType
    percentile_keys: list[str] = field(default_factory=list)

    @property
    def column_names(self) -> list[str]:
        """Names of the columns this entry projects to."""
        if self.column_type is ColumnType.PERCENTILE_EXPANSION:
            return [f"{self.name}.{key}" for key in self.percentile_keys]
        return [self.name]


def sample_types(rows: Iterable[Mapping[str, Any]], name: str) -> set[ColumnType]:
    """Types observed for a field across rows, ignoring absent and blank values."""
    observed: set[ColumnType] = set()
    for row in rows:
        value = row.get(name)
        if is_blank(value):
            continue
        kind = kind_of(value)
        if kind is ValueKind.NUMBER:
            observed.add(ColumnType.NUMBER)
        elif kind is ValueKind.STRING:
            text = value if isinstance(value, str) else str(value)
            if parse_numeric_string(text) is not None:
                observed.add(ColumnType.NUMBER)
            else:
                observed.add(ColumnType.STRING)
        elif kind is ValueKind.ARRAY:
            observed.add(ColumnType.ARRAY_AS_TEXT)
        elif kind is ValueKind.OBJECT:
            observed.add(ColumnType.OBJECT_AS_TEXT)
        elif kind is ValueKind.BOOL:
            observed.add(ColumnType.BOOLEAN)
    return observed


def resolve_type(observed: set[ColumnType]) -> ColumnType:
    """Pick by priority NUMBER > STRING > ARRAY > OBJECT > BOOLEAN."""
    for column_type in TYPE_PRIORITY:
        if column_type in observed:
            return column_type
    return ColumnType.STRING


def infer_column_type(
    rows: Sequence[Mapping[str, Any]],
    name: str,
    registry: AggregationRegistry | None = None,
) -> ColumnType:
    """
    Infer the output type of a field

    Aggregation fields are typed by naming convention; every other field by
    sampling all rows. A field is NUMBER if any row holds a number or numeric
    string, even when other rows hold incompatible values.
    """
    registry = registry or get_registry()
    by_convention = registry.type_for(name)
    if by_convention is not None:
        return by_convention
    return resolve_type(sample_types(rows, name))


def collect_percentile_keys(rows: Iterable[Mapping[str, Any]], name: str) -> list[str]:
    keys: dict[str, None] = {}
    for row in rows:
        value = row.get(name)
        if kind_of(value) is ValueKind.OBJECT:
            for key in value:
                keys.setdefault(str(key), None)
    return list(keys)


def _lookup_percentile(obj: Mapping[Any, Any], key: str) -> Any:
    """Value stored under a percentile key, matching keys by their text form."""
    if key in obj:
        return obj[key]
    for raw_key, value in obj.items():
        if str(raw_key) == key:
            return value
    return None


def _project_value(value: Any, column_type: ColumnType) -> Any:
    if value is None:
        return None
    if column_type is ColumnType.NUMBER:
        return as_number(value)
    if column_type is ColumnType.BOOLEAN:
        return as_bool(value)
    if column_type is ColumnType.TIMESTAMP:
        return as_timestamp(value, TimeUnit.MILLISECONDS)
    return as_display_text(value)


class FieldCatalog:
    """
    Ordered catalogue of data fields and their inferred column types

    Built once over a whole result set and projected onto any subset of its
    rows, so that every facet group yields the same columns.

    Examples:
        >>> rows = [{"value": 10.0}, {"value": "oops"}]
        >>> catalog = FieldCatalog.from_rows(rows)
        >>> catalog["value"].column_type
        <ColumnType.NUMBER: 'number'>
        >>> [c.values for c in catalog.project(rows)]
        [[10.0, None]]
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()):
        self._entries: dict[str, CatalogEntry] = {e.name: e for e in entries}

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Mapping[str, Any]],
        sort_fields: bool = False,
        registry: AggregationRegistry | None = None,
    ) -> "FieldCatalog":
        """
        Catalogue every data field present in at least one row

        Args:
            rows: Result rows
            sort_fields: Order fields by name instead of first appearance
            registry: Aggregation conventions (global registry by default)

        Returns:
            FieldCatalog; reserved time and facet fields are excluded
        """
        names = cls.field_names(rows)
        if sort_fields:
            names = sorted(names)

        entries = []
        for name in names:
            column_type = infer_column_type(rows, name, registry)
            entry = CatalogEntry(name, column_type)
            if column_type is ColumnType.PERCENTILE_EXPANSION:
                entry.percentile_keys = collect_percentile_keys(rows, name)
            entries.append(entry)
            logger.debug("Catalogued field %s as %s", name, column_type.value)

        return cls(entries)

    @staticmethod
    def field_names(rows: Iterable[Mapping[str, Any]]) -> list[str]:
        """Union of data field names in first-appearance order."""
        names: dict[str, None] = {}
        for row in rows:
            for key in row:
                if is_data_field(key):
                    names.setdefault(key, None)
        return list(names)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> CatalogEntry:
        return self._entries[name]

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def types(self) -> dict[str, ColumnType]:
        return {name: entry.column_type for name, entry in self._entries.items()}

    def without(self, *names: str) -> "FieldCatalog":
        """Catalogue minus the given field names."""
        return FieldCatalog(e for e in self._entries.values() if e.name not in names)

    def project(
        self,
        rows: Sequence[Mapping[str, Any]],
        labels: Mapping[str, str] | None = None,
    ) -> list[Column]:
        """
        Project rows into typed columns

        Args:
            rows: Rows to project (the catalogued set or any subset of it)
            labels: Dimension labels attached to every produced column

        Returns:
            Columns in catalogue order, each exactly len(rows) long; absent or
            incompatible cells are None
        """
        columns = []
        for entry in self._entries.values():
            if entry.column_type is ColumnType.PERCENTILE_EXPANSION:
                columns.extend(self._expand_percentiles(entry, rows, labels))
                continue
            values = [_project_value(row.get(entry.name), entry.column_type) for row in rows]
            columns.append(Column(entry.name, entry.column_type, values, dict(labels or {})))
        return columns

    @staticmethod
    def _expand_percentiles(
        entry: CatalogEntry,
        rows: Sequence[Mapping[str, Any]],
        labels: Mapping[str, str] | None,
    ) -> list[Column]:
        columns = []
        for key in entry.percentile_keys:
            values = []
            for row in rows:
                obj = row.get(entry.name)
                if kind_of(obj) is ValueKind.OBJECT:
                    values.append(as_number(_lookup_percentile(obj, key)))
                else:
                    values.append(None)
            columns.append(
                Column(f"{entry.name}.{key}", ColumnType.NUMBER, values, dict(labels or {}))
            )
        return columns

    def __repr__(self) -> str:
        fields = ", ".join(f"{e.name}: {e.column_type.value}" for e in self._entries.values())
        return f"<FieldCatalog [{fields}]>"
