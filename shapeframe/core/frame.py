"""
Frame and Column - columnar output consumed by visualization layers

A Frame is one renderable table or series. Every Column in a Frame holds the
same number of values, one per contributing row.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np
import pyarrow as pa

from shapeframe.core.exceptions import FrameShapeError

if TYPE_CHECKING:
    import pandas as pd
    from numpy.typing import NDArray


class ColumnType(Enum):
    """Inferred output type of a catalogued field"""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    ARRAY_AS_TEXT = "array"
    OBJECT_AS_TEXT = "object"
    PERCENTILE_EXPANSION = "percentile"

    @property
    def is_text(self) -> bool:
        return self in (ColumnType.STRING, ColumnType.ARRAY_AS_TEXT, ColumnType.OBJECT_AS_TEXT)


class VisualizationHint(Enum):
    """Preferred rendering of a frame"""

    TABLE = "table"
    GRAPH = "graph"


# Arrow storage type per column type
ARROW_TYPES = {
    ColumnType.NUMBER: pa.float64(),
    ColumnType.STRING: pa.string(),
    ColumnType.BOOLEAN: pa.bool_(),
    ColumnType.TIMESTAMP: pa.timestamp("ms", tz="UTC"),
    ColumnType.ARRAY_AS_TEXT: pa.string(),
    ColumnType.OBJECT_AS_TEXT: pa.string(),
    ColumnType.PERCENTILE_EXPANSION: pa.float64(),
}


@dataclass
class Column:
    """
    Named, typed sequence of nullable values

    Attributes:
        name: Column name (e.g. "count", "percentile.duration.95")
        column_type: Type every non-null value conforms to
        values: One value per row, None where the row had no usable value
        labels: Dimension labels for faceted series (e.g. {"service": "web"})
    """

    name: str
    column_type: ColumnType
    values: list[Any] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def null_count(self) -> int:
        return sum(1 for v in self.values if v is None)

    def arrow_field(self) -> pa.Field:
        metadata = {b"column_type": self.column_type.value.encode()}
        if self.labels:
            metadata[b"labels"] = json.dumps(self.labels, sort_keys=True).encode()
        return pa.field(self.name, ARROW_TYPES[self.column_type], metadata=metadata)

    def to_arrow(self) -> pa.Array:
        return pa.array(self.values, type=ARROW_TYPES[self.column_type])

    def to_numpy(self) -> NDArray:
        """
        Convert to a NumPy array

        Numbers become float64 with NaN for nulls, timestamps datetime64[ms]
        with NaT, everything else an object array.
        """
        if self.column_type in (ColumnType.NUMBER, ColumnType.PERCENTILE_EXPANSION):
            return np.array(
                [np.nan if v is None else v for v in self.values], dtype=np.float64
            )
        if self.column_type is ColumnType.TIMESTAMP:
            return np.array(
                [
                    np.datetime64("NaT", "ms")
                    if v is None
                    else np.datetime64(int(v.timestamp() * 1000), "ms")
                    for v in self.values
                ],
                dtype="datetime64[ms]",
            )
        return np.array(self.values, dtype=object)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.column_type.value,
            "labels": dict(self.labels),
            "values": [v.isoformat() if isinstance(v, datetime) else v for v in self.values],
        }

    def __repr__(self) -> str:
        labels = f" {self.labels}" if self.labels else ""
        return f"<Column {self.name}{labels}: {self.column_type.value}[{len(self)}]>"


@dataclass
class Frame:
    """
    Named, ordered collection of equal-length columns

    Attributes:
        name: Frame name (e.g. "response", a facet value)
        columns: Ordered columns
        visualization: Preferred rendering
        meta: Free-form metadata (the classified query shape under "shape")

    Raises:
        FrameShapeError: If columns differ in length

    Examples:
        >>> frame = Frame("count", [Column("count", ColumnType.NUMBER, [42.0])])
        >>> frame.num_rows
        1
        >>> df = frame.to_pandas()
    """

    name: str
    columns: list[Column] = field(default_factory=list)
    visualization: VisualizationHint = VisualizationHint.GRAPH
    meta: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        lengths = {len(column) for column in self.columns}
        if len(lengths) > 1:
            detail = ", ".join(f"{c.name}={len(c)}" for c in self.columns)
            raise FrameShapeError(f"Frame {self.name!r} has ragged columns: {detail}")

    @property
    def num_rows(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def column(self, name: str) -> Column:
        """First column with the given name."""
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(f"No column {name!r} in frame {self.name!r}. Available: {self.column_names}")

    def to_arrow(self) -> pa.Table:
        """
        Convert to a pyarrow Table

        Column labels and types are kept as field metadata; frame name,
        visualization and meta as schema metadata.
        """
        schema = pa.schema(
            [column.arrow_field() for column in self.columns],
            metadata={
                b"name": self.name.encode(),
                b"visualization": self.visualization.value.encode(),
                b"meta": json.dumps(self.meta, sort_keys=True, default=str).encode(),
            },
        )
        return pa.Table.from_arrays([column.to_arrow() for column in self.columns], schema=schema)

    @classmethod
    def from_arrow(cls, table: pa.Table) -> "Frame":
        """Inverse of to_arrow()."""
        schema_meta = table.schema.metadata or {}
        columns = []
        for index, arrow_field in enumerate(table.schema):
            field_meta = arrow_field.metadata or {}
            column_type = ColumnType(field_meta.get(b"column_type", b"string").decode())
            labels = json.loads(field_meta[b"labels"]) if b"labels" in field_meta else {}
            columns.append(
                Column(
                    name=arrow_field.name,
                    column_type=column_type,
                    values=table.column(index).to_pylist(),
                    labels=labels,
                )
            )
        return cls(
            name=schema_meta.get(b"name", b"").decode(),
            columns=columns,
            visualization=VisualizationHint(
                schema_meta.get(b"visualization", b"graph").decode()
            ),
            meta=json.loads(schema_meta.get(b"meta", b"{}")),
        )

    def to_pandas(self) -> pd.DataFrame:
        """Convert to a pandas DataFrame (one DataFrame column per Column)."""
        return self.to_arrow().to_pandas()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "visualization": self.visualization.value,
            "meta": dict(self.meta),
            "columns": [column.to_dict() for column in self.columns],
        }

    def __repr__(self) -> str:
        return (
            f"<Frame {self.name!r}>\n"
            f"Visualization: {self.visualization.value}\n"
            f"Rows: {self.num_rows}\n"
            f"Columns: {', '.join(self.column_names)}"
        )
