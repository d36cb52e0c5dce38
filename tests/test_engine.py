"""End-to-end tests for search, suggestions and facets."""

from collections.abc import Callable

from content_api.search.engine import get_filter_options, get_search_suggestions, search
from content_api.search.schemas import (
    ContentItem,
    SearchFilters,
    SearchOptions,
    SortKey,
)


def test_query_ranks_title_matches_above_body_matches(
    rust_collection: list[ContentItem],
) -> None:
    """Rust posts come first, the body-only mention last, pasta not at all."""
    response = search(rust_collection, SearchFilters(query="rust"))
    ids = [r.item.id for r in response.results]

    assert ids[:2] == ["1", "2"] or ids[:2] == ["2", "1"]
    assert ids[2:] == ["4"]
    assert "3" not in ids
    assert response.total_count == 3


def test_query_over_three_items(rust_collection: list[ContentItem]) -> None:
    """Both Rust items match; Cooking Pasta is excluded."""
    response = search(rust_collection[:3], SearchFilters(query="rust"))

    assert sorted(r.item.id for r in response.results) == ["1", "2"]
    assert response.total_count == 2


def test_content_type_filter_counts(rust_collection: list[ContentItem]) -> None:
    """Only the two blog posts pass a blog type filter."""
    response = search(rust_collection[:3], SearchFilters(content_type="blog"))

    assert response.total_count == 2


def test_case_insensitive_tag_filter(make_item: Callable[..., ContentItem]) -> None:
    """Tag filters match regardless of case."""
    item = make_item("go", "Concurrency", tags=["go", "golang"])

    response = search([item], SearchFilters(tags=["GO"]))

    assert [r.item.id for r in response.results] == ["go"]


def test_total_count_ignores_pagination(make_item: Callable[..., ContentItem]) -> None:
    """The total counts every match, not just the returned page."""
    items = [make_item(str(i), f"Post {i}") for i in range(3)]

    response = search(items, SearchFilters(), SearchOptions(offset=1, limit=1))

    assert len(response.results) == 1
    assert response.results[0].item.id == "1"
    assert response.total_count == 3


def test_empty_query_returns_everything_with_score_one(
    rust_collection: list[ContentItem],
) -> None:
    """Without a query every item matches with a flat score."""
    response = search(rust_collection)

    assert [r.item.id for r in response.results] == ["1", "2", "3", "4"]
    assert {r.score for r in response.results} == {1.0}
    assert response.search_time >= 0


def test_results_reference_original_items(rust_collection: list[ContentItem]) -> None:
    """Results carry the caller's item objects, not copies."""
    response = search(rust_collection, SearchFilters(query="pasta"))

    assert response.results[0].item is rust_collection[2]


def test_fuzzy_off_uses_flat_weights(rust_collection: list[ContentItem]) -> None:
    """Exact matching adds the raw field weights."""
    response = search(
        rust_collection,
        SearchFilters(query="rust"),
        SearchOptions(fuzzy_search=False),
    )
    scores = {r.item.id: r.score for r in response.results}

    # title 10 + tag 8
    assert scores["1"] == 18.0
    assert scores["2"] == 18.0
    assert scores["4"] == 2.0


def test_sort_by_newest(rust_collection: list[ContentItem]) -> None:
    """Newest sorts by creation date, latest first."""
    response = search(rust_collection, options=SearchOptions(sort_by=SortKey.NEWEST))

    assert [r.item.id for r in response.results] == ["2", "1", "3", "4"]


def test_highlights_only_when_requested(rust_collection: list[ContentItem]) -> None:
    """Highlights are filled in only when the option is on."""
    plain = search(rust_collection, SearchFilters(query="pasta"))
    highlighted = search(
        rust_collection,
        SearchFilters(query="pasta"),
        SearchOptions(highlight_matches=True),
    )

    assert plain.results[0].highlights is None
    assert highlighted.results[0].highlights[0].field == "title"


def test_search_does_not_mutate_input(rust_collection: list[ContentItem]) -> None:
    """Searching leaves the collection untouched."""
    before = [item.model_dump() for item in rust_collection]
    search(rust_collection, SearchFilters(query="rust"), SearchOptions(sort_by=SortKey.TITLE))

    assert [item.model_dump() for item in rust_collection] == before


def test_suggestions_in_discovery_order(rust_collection: list[ContentItem]) -> None:
    """Suggestions come back in the order they were found."""
    suggestions = get_search_suggestions(rust_collection, "ru")

    assert suggestions == ["Intro to Rust", "rust", "Rust Ownership"]


def test_suggestions_respect_limit(rust_collection: list[ContentItem]) -> None:
    """No more than the limit is returned."""
    assert get_search_suggestions(rust_collection, "ru", limit=2) == ["Intro to Rust", "rust"]


def test_suggestions_include_categories(rust_collection: list[ContentItem]) -> None:
    """Categories are suggested, matched case-insensitively."""
    assert get_search_suggestions(rust_collection, "FOO") == ["food"]


def test_suggestions_need_two_characters(rust_collection: list[ContentItem]) -> None:
    """Queries under two characters suggest nothing."""
    assert get_search_suggestions(rust_collection, "r") == []
    assert get_search_suggestions(rust_collection, "") == []


def test_suggestions_are_unique(make_item: Callable[..., ContentItem]) -> None:
    """Repeated titles and tags are suggested once."""
    items = [make_item(str(i), "Same Title", tags=["same"]) for i in range(5)]

    suggestions = get_search_suggestions(items, "same", limit=10)

    assert suggestions == ["Same Title", "same"]


def test_filter_options(
    rust_collection: list[ContentItem],
    make_item: Callable[..., ContentItem],
) -> None:
    """Facets list distinct non-empty values in first-seen order."""
    collection = [*rust_collection, make_item("5", "No status", status=None, category="")]

    options = get_filter_options(collection)

    assert options.content_types == ["blog", "note"]
    assert options.statuses == ["published"]
    assert options.categories == ["programming", "food"]
    assert options.tags == ["rust", "systems"]
    assert options.authors == ["Ada Lovelace"]
    assert options.block_types == ["PARAGRAPH"]


def test_filter_options_empty_collection() -> None:
    """An empty collection has empty facets."""
    options = get_filter_options([])

    assert options.content_types == []
    assert options.block_types == []


def test_unreadable_block_field_keeps_item_searchable(
    make_item: Callable[..., ContentItem],
) -> None:
    """A null code language does not hide the paragraph next to it."""
    item = make_item(
        "4",
        "Garden Tools",
        contentBlocks=[
            {"blockType": "PARAGRAPH", "data": {"text": "Keep the shears free of rust."}},
            {"blockType": "CODE_BLOCK", "data": {"code": "print(1)", "language": None}},
        ],
    )

    response = search([item], SearchFilters(query="rust"))
    options = get_filter_options([item])

    assert response.total_count == 1
    assert options.block_types == ["PARAGRAPH", "CODE_BLOCK"]
