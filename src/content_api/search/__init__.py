"""In-memory content search: indexing, filtering, relevance ranking and facets."""

from content_api.search.engine import get_filter_options, get_search_suggestions, search
from content_api.search.index import ContentValidationError, build_index, parse_content
from content_api.search.schemas import (
    Block,
    BlockType,
    ContentItem,
    FilterOptions,
    SearchFilters,
    SearchIndexRecord,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SortKey,
    SortOrder,
)

__all__ = [
    "Block",
    "BlockType",
    "ContentItem",
    "ContentValidationError",
    "FilterOptions",
    "SearchFilters",
    "SearchIndexRecord",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "SortKey",
    "SortOrder",
    "build_index",
    "get_filter_options",
    "get_search_suggestions",
    "parse_content",
    "search",
]
