"""
Aggregation naming conventions.

Fields produced by aggregation functions are typed from their names rather
than by sampling values: ``percentile.duration`` is always expanded, and
``histogram.duration`` is always rendered as text even if a row happens to
hold a single number.
"""

import logging
from dataclasses import dataclass

from shapeframe.core.fields import COUNT_FIELD
from shapeframe.core.frame import ColumnType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationConvention:
    """
    Maps an aggregation field naming pattern to a column type.

    Attributes:
        pattern: Name prefix (e.g. "sum.") or exact name (e.g. "count")
        column_type: Type assigned to matching fields
        exact: Match the whole name instead of a prefix
        timestamp_type: Type assigned when the remainder after the prefix
            mentions "timestamp" (earliest./latest. of a time attribute)

    Examples:
        >>> AggregationConvention("p95.", ColumnType.NUMBER).matches("p95.duration")
        True
    """

    pattern: str
    column_type: ColumnType = ColumnType.NUMBER
    exact: bool = False
    timestamp_type: ColumnType | None = None

    def matches(self, field_name: str) -> bool:
        if self.exact:
            return field_name == self.pattern
        return field_name.startswith(self.pattern)

    def type_for(self, field_name: str) -> ColumnType:
        if self.timestamp_type is not None and not self.exact:
            remainder = field_name[len(self.pattern):]
            if "timestamp" in remainder:
                return self.timestamp_type
        return self.column_type


# Built-in conventions for NRQL aggregation functions
BUILTIN_CONVENTIONS = (
    AggregationConvention(COUNT_FIELD, exact=True),
    AggregationConvention("histogram.", ColumnType.ARRAY_AS_TEXT),
    AggregationConvention("uniques.", ColumnType.ARRAY_AS_TEXT),
    AggregationConvention("percentile.", ColumnType.PERCENTILE_EXPANSION),
    AggregationConvention("earliest.", timestamp_type=ColumnType.TIMESTAMP),
    AggregationConvention("latest.", timestamp_type=ColumnType.TIMESTAMP),
    AggregationConvention("sum."),
    AggregationConvention("average."),
    AggregationConvention("min."),
    AggregationConvention("max."),
    AggregationConvention("median."),
    AggregationConvention("rate."),
    AggregationConvention("stddev."),
    AggregationConvention("variance."),
    AggregationConvention("apdex."),
    AggregationConvention("round."),
    AggregationConvention("percentage."),
    AggregationConvention("getField."),
    AggregationConvention("uniqueCount."),
)


class AggregationRegistry:
    """
    In-memory registry of aggregation naming conventions.

    Includes built-in conventions and user-registered ones. Conventions are
    consulted in registration order (built-ins first) and the first match wins.
    """

    def __init__(self):
        self._conventions: list[AggregationConvention] = list(BUILTIN_CONVENTIONS)

    def register(self, convention: AggregationConvention) -> None:
        """Register a convention; replaces one with the same pattern."""
        self._conventions = [c for c in self._conventions if c.pattern != convention.pattern]
        self._conventions.append(convention)
        logger.info("Registered aggregation convention: %s", convention.pattern)

    def match(self, field_name: str) -> AggregationConvention | None:
        for convention in self._conventions:
            if convention.matches(field_name):
                return convention
        return None

    def is_aggregation(self, field_name: str) -> bool:
        return self.match(field_name) is not None

    def type_for(self, field_name: str) -> ColumnType | None:
        """Column type implied by the name, None for non-aggregation fields."""
        convention = self.match(field_name)
        return convention.type_for(field_name) if convention else None

    def list_patterns(self) -> list[str]:
        return [c.pattern for c in self._conventions]


# Global registry instance
_global_registry = AggregationRegistry()


def register_aggregation(
    pattern: str,
    column_type: ColumnType = ColumnType.NUMBER,
    exact: bool = False,
) -> AggregationConvention:
    """
    Register an aggregation naming convention in the global registry.

    Args:
        pattern: Field name prefix, or exact name when ``exact`` is set
        column_type: Type assigned to matching fields
        exact: Match whole names only

    Returns:
        The created AggregationConvention

    Examples:
        >>> register_aggregation("cdfPercentage.", ColumnType.NUMBER)
    """
    convention = AggregationConvention(pattern, column_type, exact)
    _global_registry.register(convention)
    return convention


def get_registry() -> AggregationRegistry:
    """Get the global aggregation registry."""
    return _global_registry
