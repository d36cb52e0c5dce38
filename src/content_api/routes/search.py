"""Content search API endpoints.

Each endpoint receives the content snapshot in the request body and runs a
stateless search over it.
"""

from datetime import UTC, datetime
from typing import Literal

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import Response

from content_api.config import Settings
from content_api.search import engine
from content_api.search.export import results_to_csv, results_to_json
from content_api.search.filters import describe_filters, has_active_filters
from content_api.search.schemas import (
    ContentCollectionRequest,
    FilterOptions,
    FilterSummaryRequest,
    FilterSummaryResponse,
    SearchRequest,
    SearchResponse,
    SuggestionRequest,
    SuggestionResponse,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/search", tags=["search"])

_EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
}


def _run_search(request: Request, body: SearchRequest) -> SearchResponse:
    """Run a search and warn when it exceeds the configured time budget."""
    settings: Settings = request.app.state.settings
    response = engine.search(body.content, body.filters, body.options)

    if response.search_time > settings.slow_search_ms:
        logger.warning(
            "slow_search",
            search_time_ms=round(response.search_time, 3),
            threshold_ms=settings.slow_search_ms,
            content_count=len(body.content),
        )
    return response


@router.post(
    "",
    response_model=SearchResponse,
    summary="Search a content collection",
    description="Filters, scores, sorts and paginates the supplied content items.",
)
def search(request: Request, body: SearchRequest) -> SearchResponse:
    """Search the supplied content.

    Args:
        request: FastAPI request (provides access to app state).
        body: Content snapshot, filters and options.

    Returns:
        Ranked page of results with the total match count and search time.
    """
    return _run_search(request, body)


@router.post(
    "/suggestions",
    response_model=SuggestionResponse,
    summary="Autocomplete suggestions",
)
def suggestions(request: Request, body: SuggestionRequest) -> SuggestionResponse:
    """Suggest titles, tags and categories containing a partial query.

    Args:
        request: FastAPI request (provides access to app state).
        body: Content snapshot, partial query and optional limit.

    Returns:
        Unique suggestions in discovery order.
    """
    settings: Settings = request.app.state.settings
    limit = body.limit or settings.suggestion_limit
    return SuggestionResponse(
        suggestions=engine.get_search_suggestions(body.content, body.query, limit)
    )


@router.post(
    "/filter-options",
    response_model=FilterOptions,
    summary="Facet values present in a collection",
)
def filter_options(body: ContentCollectionRequest) -> FilterOptions:
    """List the distinct values available for each filter."""
    return engine.get_filter_options(body.content)


@router.post(
    "/summary",
    response_model=FilterSummaryResponse,
    summary="Describe a filter set",
)
async def filter_summary(body: FilterSummaryRequest) -> FilterSummaryResponse:
    """Report whether any filter is active and describe the active ones."""
    return FilterSummaryResponse(
        active=has_active_filters(body.filters),
        summary=describe_filters(body.filters),
    )


@router.post(
    "/export",
    summary="Export search results",
    description="Runs a search and returns the matching items as JSON or CSV.",
    response_class=Response,
)
def export(
    request: Request,
    body: SearchRequest,
    format: Literal["json", "csv"] = Query(
        default="json",
        description="Export file format",
    ),
) -> Response:
    """Export the result page of a search as a downloadable file.

    Args:
        request: FastAPI request (provides access to app state).
        body: Content snapshot, filters and options.
        format: ``json`` or ``csv``.

    Returns:
        File response with a timestamped attachment filename.
    """
    result = _run_search(request, body)
    items = [r.item for r in result.results]
    content = results_to_csv(items) if format == "csv" else results_to_json(items)

    stamp = int(datetime.now(UTC).timestamp() * 1000)
    logger.info("search_exported", format=format, item_count=len(items))
    return Response(
        content=content,
        media_type=_EXPORT_MEDIA_TYPES[format],
        headers={
            "Content-Disposition": f'attachment; filename="search-results-{stamp}.{format}"'
        },
    )
