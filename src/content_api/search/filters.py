"""Structured filtering of search records.

All supplied filter fields combine with AND. A field left unset (None, or an
empty list for tags and block kinds) imposes no constraint.
"""

from collections.abc import Sequence
from datetime import datetime

from content_api.search.schemas import (
    DateRange,
    NumericRange,
    SearchFilters,
    SearchIndexRecord,
)


def _in_range(value: int, bounds: NumericRange | None) -> bool:
    if bounds is None:
        return True
    if bounds.min is not None and value < bounds.min:
        return False
    if bounds.max is not None and value > bounds.max:
        return False
    return True


def _in_date_range(value: datetime, bounds: DateRange | None) -> bool:
    if bounds is None:
        return True
    if bounds.start is not None and value < bounds.start:
        return False
    if bounds.end is not None and value > bounds.end:
        return False
    return True


def matches_filters(record: SearchIndexRecord, filters: SearchFilters) -> bool:
    """Check one record against a filter set.

    Args:
        record: Search record to test.
        filters: Filters to apply.

    Returns:
        True if the record satisfies every supplied filter.
    """
    if filters.content_type and record.content_type != filters.content_type:
        return False
    if filters.status and record.status != filters.status:
        return False
    if filters.featured is not None and record.featured != filters.featured:
        return False
    if filters.category and record.category != filters.category:
        return False

    # Every requested tag must be a substring of at least one record tag
    record_tags = [tag.lower() for tag in record.tags]
    for wanted in filters.tags:
        needle = wanted.lower()
        if not any(needle in tag for tag in record_tags):
            return False

    if filters.author and filters.author.lower() not in record.author.lower():
        return False
    if not all(kind in record.block_types for kind in filters.block_types):
        return False
    if filters.has_media is not None and record.has_images != filters.has_media:
        return False

    return (
        _in_range(record.word_count, filters.word_count)
        and _in_range(record.reading_time, filters.reading_time)
        and _in_date_range(record.created_at, filters.created_date_range)
        and _in_date_range(record.updated_at, filters.updated_date_range)
    )


def apply_filters(
    records: Sequence[SearchIndexRecord],
    filters: SearchFilters,
) -> list[SearchIndexRecord]:
    """Keep the records that satisfy every supplied filter, order preserved."""
    return [record for record in records if matches_filters(record, filters)]


def has_active_filters(filters: SearchFilters) -> bool:
    """Whether any filter field holds a non-empty value."""
    return any(
        value not in (None, "", [])
        for value in filters.model_dump().values()
    )


def _describe_range(label: str, bounds: NumericRange | None, unit: str = "") -> str | None:
    if bounds is None:
        return None
    low, high = bounds.min, bounds.max
    if low and high:
        return f"{label}: {low}-{high}{unit}"
    if low:
        return f"{label}: {low}{unit}+"
    if high:
        return f"{label}: <{high}{unit}"
    return None


def describe_filters(filters: SearchFilters) -> list[str]:
    """Build a readable one-line-per-filter summary for display.

    Args:
        filters: Filters to describe.

    Returns:
        Summary lines such as ``Type: blog`` or ``Words: 100+``, in a fixed
        field order. Empty when no filter is active.
    """
    summary: list[str] = []

    if filters.query:
        summary.append(f'Query: "{filters.query}"')
    if filters.content_type:
        summary.append(f"Type: {filters.content_type}")
    if filters.status:
        summary.append(f"Status: {filters.status}")
    if filters.featured is not None:
        summary.append(f"Featured: {'Yes' if filters.featured else 'No'}")
    if filters.category:
        summary.append(f"Category: {filters.category}")
    if filters.author:
        summary.append(f"Author: {filters.author}")
    if filters.tags:
        summary.append(f"Tags: {', '.join(filters.tags)}")
    if filters.block_types:
        summary.append(f"Content: {', '.join(filters.block_types)}")
    if filters.has_media is not None:
        summary.append(f"Media: {'With Images' if filters.has_media else 'No Images'}")

    summary.extend(
        line
        for line in (
            _describe_range("Words", filters.word_count),
            _describe_range("Reading Time", filters.reading_time, unit="min"),
        )
        if line
    )
    return summary
