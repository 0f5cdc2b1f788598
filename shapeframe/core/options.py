"""
Formatting options shared by the frame builder, query runner and CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from shapeframe.core.frame import VisualizationHint
from shapeframe.core.timeseries import ensure_utc, utc_now


@dataclass
class FormatOptions:
    """
    Options controlling how result sets become frames

    Attributes:
        time_range: Caller's requested (start, end); its start is the default
            instant for rows without time fields, and it spans the synthetic
            graph of a single count
        now: Instant used as "now" (current UTC time when None)
        sort_fields: Emit catalogued fields in sorted order instead of first
            appearance
        include_facet_table: Prepend a table frame listing facet values and
            counts for faceted count queries
        visualization: Override the hint of standard (ungrouped) frames

    Examples:
        >>> opts = FormatOptions(
        ...     time_range=(datetime(2024, 1, 1), datetime(2024, 1, 2)),
        ...     sort_fields=True,
        ... )
    """

    time_range: tuple[datetime, datetime] | None = None
    now: datetime | None = None
    sort_fields: bool = False
    include_facet_table: bool = False
    visualization: VisualizationHint | None = None

    def __post_init__(self):
        if self.time_range is not None:
            start, end = self.time_range
            if ensure_utc(start) > ensure_utc(end):
                raise ValueError(f"time_range start {start} is after end {end}")

    def resolve_now(self) -> datetime:
        return ensure_utc(self.now) if self.now is not None else utc_now()

    def default_instant(self, now: datetime) -> datetime:
        """Fallback time for rows without timestamp or beginTimeSeconds."""
        if self.time_range is not None:
            return ensure_utc(self.time_range[0])
        return now

    def to_dict(self) -> dict[str, Any]:
        return {
            "time_range": (
                [self.time_range[0].isoformat(), self.time_range[1].isoformat()]
                if self.time_range
                else None
            ),
            "now": self.now.isoformat() if self.now else None,
            "sort_fields": self.sort_fields,
            "include_facet_table": self.include_facet_table,
            "visualization": self.visualization.value if self.visualization else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormatOptions":
        time_range = data.get("time_range")
        now = data.get("now")
        visualization = data.get("visualization")
        return cls(
            time_range=(
                (datetime.fromisoformat(time_range[0]), datetime.fromisoformat(time_range[1]))
                if time_range
                else None
            ),
            now=datetime.fromisoformat(now) if now else None,
            sort_fields=data.get("sort_fields", False),
            include_facet_table=data.get("include_facet_table", False),
            visualization=VisualizationHint(visualization) if visualization else None,
        )
