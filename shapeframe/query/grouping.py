"""
Facet grouping - partition rows by their facet value
"""

import logging
from typing import Any, Mapping, Sequence

from shapeframe.core.fields import FACET_FIELD
from shapeframe.core.values import ValueKind, as_display_text, kind_of

logger = logging.getLogger(__name__)


def has_facet(row: Mapping[str, Any]) -> bool:
    """Whether a row carries a usable facet (non-null, not an empty list)."""
    value = row.get(FACET_FIELD)
    if value is None:
        return False
    if kind_of(value) is ValueKind.ARRAY:
        return len(value) > 0
    return True


def facet_key(row: Mapping[str, Any]) -> str | None:
    """
    Group key of a row

    Array facets are keyed by their first element, scalars by themselves.
    Rows without a usable facet, or whose key renders as empty text, have
    no key.
    """
    if not has_facet(row):
        return None
    value = row[FACET_FIELD]
    if kind_of(value) is ValueKind.ARRAY:
        value = value[0]
    key = as_display_text(value)
    return key or None


def facet_values(row: Mapping[str, Any], dimensions: Sequence[str]) -> dict[str, str | None]:
    """
    Map every dimension to the row's facet value for it

    Array facets are matched positionally against ``dimensions``; a scalar
    facet fills the first dimension only.
    """
    values: dict[str, str | None] = {name: None for name in dimensions}
    if not dimensions or not has_facet(row):
        return values
    value = row[FACET_FIELD]
    if kind_of(value) is ValueKind.ARRAY:
        for name, item in zip(dimensions, value):
            values[name] = as_display_text(item)
    else:
        values[dimensions[0]] = as_display_text(value)
    return values


def group_by_facet(rows: Sequence[Mapping[str, Any]]) -> dict[str, list[Mapping[str, Any]]]:
    """
    Partition rows by facet key

    Args:
        rows: Result rows, expected in time order

    Returns:
        Mapping from group key to that group's rows, ordered by first
        appearance of each key; rows keep their relative order. Rows
        without a key belong to no group.

    Examples:
        >>> groups = group_by_facet([
        ...     {"count": 1, "facet": ["web"]},
        ...     {"count": 2, "facet": ["db"]},
        ...     {"count": 3, "facet": ["web"]},
        ... ])
        >>> {k: len(v) for k, v in groups.items()}
        {'web': 2, 'db': 1}
    """
    groups: dict[str, list[Mapping[str, Any]]] = {}
    dropped = 0
    for row in rows:
        key = facet_key(row)
        if key is None:
            dropped += 1
            continue
        groups.setdefault(key, []).append(row)

    if dropped:
        logger.debug("Dropped %d of %d rows without a facet value", dropped, len(rows))
    logger.debug("Grouped %d rows into %d facet groups", len(rows) - dropped, len(groups))
    return groups
