"""
Reserved field vocabulary of analytics result rows.
"""

COUNT_FIELD = "count"
FACET_FIELD = "facet"
TIMESTAMP_FIELD = "timestamp"
BEGIN_TIME_FIELD = "beginTimeSeconds"
END_TIME_FIELD = "endTimeSeconds"

# Output column name for derived row times
TIME_COLUMN = "time"

RESERVED_FIELDS = frozenset(
    {COUNT_FIELD, FACET_FIELD, TIMESTAMP_FIELD, BEGIN_TIME_FIELD, END_TIME_FIELD}
)

# Markers emitted by TIMESERIES queries
TIMESERIES_MARKERS = frozenset({BEGIN_TIME_FIELD, END_TIME_FIELD})

# Never catalogued as data columns; count stays a data field
NON_DATA_FIELDS = RESERVED_FIELDS - {COUNT_FIELD}

# Dimension name used when rows carry facets but no grouping metadata
DEFAULT_DIMENSION = FACET_FIELD

# Frame names
COUNT_FRAME_NAME = "count"
COUNT_TIME_SERIES_FRAME_NAME = "count_time_series"
STANDARD_FRAME_NAME = "response"
FACET_TABLE_FRAME_NAME = "facets"


def is_reserved(name: str) -> bool:
    """Whether a field name belongs to the reserved vocabulary."""
    return name in RESERVED_FIELDS


def is_data_field(name: str) -> bool:
    """Whether a field name should become a catalogued data column."""
    return name not in NON_DATA_FIELDS
