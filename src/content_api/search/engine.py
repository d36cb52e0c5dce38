"""Search entry points over an in-memory content snapshot.

Every call builds its own index from the collection it is given and keeps
no state between calls.
"""

import time
from collections.abc import Sequence

import structlog

from content_api.search.filters import matches_filters
from content_api.search.index import build_index
from content_api.search.ranking import paginate, sort_results
from content_api.search.schemas import (
    ContentItem,
    FilterOptions,
    SearchFilters,
    SearchOptions,
    SearchResponse,
    SearchResult,
)
from content_api.search.scoring import collect_highlights, relevance_score

logger = structlog.get_logger()

DEFAULT_SUGGESTION_LIMIT = 5
MIN_SUGGESTION_QUERY_LENGTH = 2


def search(
    content: Sequence[ContentItem],
    filters: SearchFilters | None = None,
    options: SearchOptions | None = None,
) -> SearchResponse:
    """Filter, score, sort and paginate a content collection.

    Items that pass the filters but match none of the query's terms are
    left out of the results and of the total count.

    Args:
        content: Content snapshot to search.
        filters: Filters and free-text query. No constraint when None.
        options: Sorting, pagination and matching options.

    Returns:
        SearchResponse with the requested page, the filtered total and the
        elapsed wall-clock time in milliseconds.
    """
    start = time.perf_counter()
    filters = filters or SearchFilters()
    options = options or SearchOptions()

    records = build_index(content)
    results: list[SearchResult] = []
    for item, record in zip(content, records, strict=True):
        if not matches_filters(record, filters):
            continue
        score = relevance_score(record, filters.query, options.fuzzy_search)
        # Zero means the query matched no field; a blank query scores 1
        if score <= 0:
            continue
        results.append(
            SearchResult(
                item=item,
                score=score,
                highlights=(
                    collect_highlights(record, filters.query)
                    if options.highlight_matches
                    else None
                ),
            )
        )

    ordered = sort_results(results, options.sort_by, options.sort_order)
    total_count = len(ordered)
    page = paginate(ordered, options.offset, options.limit)
    search_time = (time.perf_counter() - start) * 1000

    logger.info(
        "search_completed",
        content_count=len(content),
        total_count=total_count,
        returned=len(page),
        sort_by=options.sort_by.value,
        search_time_ms=round(search_time, 3),
    )

    return SearchResponse(
        results=page,
        total_count=total_count,
        search_time=search_time,
    )


def get_search_suggestions(
    content: Sequence[ContentItem],
    partial_query: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[str]:
    """Autocomplete strings from titles, tags and categories.

    Args:
        content: Content snapshot to draw suggestions from.
        partial_query: What the user has typed so far.
        limit: Maximum number of suggestions.

    Returns:
        Up to ``limit`` unique strings containing the query
        (case-insensitive), in order of first discovery. Empty for queries
        shorter than two characters.
    """
    if len(partial_query) < MIN_SUGGESTION_QUERY_LENGTH:
        return []

    query = partial_query.lower()
    suggestions: dict[str, None] = {}

    for record in build_index(content):
        candidates = [record.title, *record.tags]
        if record.category:
            candidates.append(record.category)
        for candidate in candidates:
            if query in candidate.lower():
                suggestions.setdefault(candidate, None)

    return list(suggestions)[:limit]


def _distinct(values: list[str | None]) -> list[str]:
    """Unique truthy values in first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def get_filter_options(content: Sequence[ContentItem]) -> FilterOptions:
    """Distinct facet values present in a collection.

    Args:
        content: Content snapshot to inspect.

    Returns:
        FilterOptions with de-duplicated values per facet. Missing
        statuses and categories are left out.
    """
    records = build_index(content)
    return FilterOptions(
        content_types=_distinct([r.content_type for r in records]),
        statuses=_distinct([r.status for r in records]),
        categories=_distinct([r.category for r in records]),
        tags=_distinct([tag for r in records for tag in r.tags]),
        authors=_distinct([r.author for r in records]),
        block_types=_distinct([kind for r in records for kind in r.block_types]),
    )
