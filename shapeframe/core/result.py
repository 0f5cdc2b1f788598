"""
Result Set

Container for the raw rows returned by an analytics query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from shapeframe.core.exceptions import ResultFormatError

Row = Dict[str, Any]


@dataclass
class ResultSet:
    """
    Ordered rows of one query execution plus optional grouping metadata

    Rows are schema-less: field sets and value types may differ from row to
    row. When the query grouped by one or more dimensions, ``facets`` lists
    their names in the order row-level ``facet`` arrays are populated.

    Attributes:
        rows: Result rows, in the order the query returned them
        facets: Grouping dimension names (e.g. ["service", "region"])

    Examples:
        >>> rs = ResultSet.from_dict({
        ...     "results": [{"count": 42.0, "facet": ["checkout"]}],
        ...     "metadata": {"facets": ["service"]},
        ... })
        >>> rs.primary_dimension
        'service'
    """

    rows: List[Row] = field(default_factory=list)
    facets: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def has_grouping(self) -> bool:
        """Whether grouping metadata names at least one dimension."""
        return bool(self.facets)

    @property
    def primary_dimension(self) -> str | None:
        """First grouping dimension; the only one used for grouping."""
        return self.facets[0] if self.facets else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [dict(row) for row in self.rows],
            "metadata": {"facets": list(self.facets)},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | List[Any]) -> "ResultSet":
        """
        Build from a decoded JSON payload

        Accepts ``{"results": [...], "metadata": {"facets": [...]}}`` or a bare
        list of rows.

        Raises:
            ResultFormatError: If the payload does not hold a list of row objects
        """
        if isinstance(data, list):
            rows, metadata = data, {}
        elif isinstance(data, Mapping):
            rows = data.get("results", [])
            metadata = data.get("metadata") or {}
        else:
            raise ResultFormatError(f"Expected object or list, got {type(data).__name__}")

        if not isinstance(rows, list):
            raise ResultFormatError("'results' must be a list of rows")
        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise ResultFormatError(f"Row {index} is not an object: {row!r}")

        facets = metadata.get("facets") if isinstance(metadata, Mapping) else None
        if facets is None:
            facets = []
        elif isinstance(facets, str):
            facets = [facets]
        elif not isinstance(facets, list):
            raise ResultFormatError("'metadata.facets' must be a list of names")

        return cls(rows=[dict(row) for row in rows], facets=[str(f) for f in facets])
