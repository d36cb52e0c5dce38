"""Result ordering and pagination."""

from collections.abc import Callable, Sequence
from typing import Any

from content_api.search.schemas import SearchResult, SortKey, SortOrder


def _text_key(value: str | None) -> tuple[str, str]:
    text = value or ""
    return text.casefold(), text


# Sort key -> (key function, natural direction is descending)
_SORT_KEYS: dict[SortKey, tuple[Callable[[SearchResult], Any], bool]] = {
    SortKey.RELEVANCE: (lambda r: r.score, True),
    SortKey.NEWEST: (lambda r: r.item.created_at, True),
    SortKey.OLDEST: (lambda r: r.item.created_at, False),
    SortKey.TITLE: (lambda r: _text_key(r.item.title), False),
    SortKey.TITLE_DESC: (lambda r: _text_key(r.item.title), True),
    SortKey.STATUS: (lambda r: _text_key(r.item.status), False),
    SortKey.TYPE: (lambda r: _text_key(r.item.content_type), False),
    SortKey.AUTHOR: (lambda r: _text_key(r.item.author), False),
}


def sort_results(
    results: Sequence[SearchResult],
    sort_by: SortKey = SortKey.RELEVANCE,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[SearchResult]:
    """Order results by a sort key.

    ``SortOrder.DESC`` keeps the key's natural direction (highest score,
    newest, A to Z, ...); ``SortOrder.ASC`` inverts it. Ties keep their
    input order.

    Args:
        results: Scored results.
        sort_by: Key to order by.
        sort_order: Whether to keep or invert the key's direction.

    Returns:
        A new, sorted list.
    """
    key, descending = _SORT_KEYS[sort_by]
    if sort_order is SortOrder.ASC:
        descending = not descending
    return sorted(results, key=key, reverse=descending)


def paginate(
    results: Sequence[SearchResult],
    offset: int = 0,
    limit: int | None = None,
) -> list[SearchResult]:
    """Slice ``[offset, offset + limit)``; no upper bound when limit is None."""
    end = offset + limit if limit is not None else None
    return list(results[offset:end])
