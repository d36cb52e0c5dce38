"""Relevance scoring with optional edit-distance weighting.

A query is split on whitespace into lowercase terms. Every field value that
contains a term as a case-insensitive substring adds that field's weight to
the score. With fuzzy scoring on, the contribution is scaled by how close the
whole field value is to the term, so a short exact title outranks a long
title that merely contains the term. Fuzzy scoring never credits a field
that fails the substring test.
"""

from collections.abc import Iterator

from content_api.search.schemas import Highlight, SearchIndexRecord

TITLE_WEIGHT = 10.0
TAG_WEIGHT = 8.0
CATEGORY_WEIGHT = 6.0
AUTHOR_WEIGHT = 6.0
DESCRIPTION_WEIGHT = 5.0
BLOCK_TEXT_WEIGHT = 2.0


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Insertions, deletions and substitutions each cost 1.

    Args:
        s1: First string.
        s2: Second string.

    Returns:
        Minimum number of single-character edits turning s1 into s2.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Only need two rows at a time
    prev_row = list(range(len(s1) + 1))
    for j, c2 in enumerate(s2, start=1):
        curr_row = [j]
        for i, c1 in enumerate(s1, start=1):
            cost = 0 if c1 == c2 else 1
            curr_row.append(
                min(
                    prev_row[i] + 1,  # deletion
                    curr_row[i - 1] + 1,  # insertion
                    prev_row[i - 1] + cost,  # substitution
                )
            )
        prev_row = curr_row

    return prev_row[-1]


def fuzzy_similarity(text: str, term: str) -> float:
    """Normalized inverse edit distance in [0, 1].

    Args:
        text: Field value.
        term: Query term.

    Returns:
        1.0 for identical strings, falling towards 0.0 as they diverge.
    """
    longest = max(len(text), len(term))
    if longest == 0:
        return 1.0
    return max(0.0, 1 - levenshtein_distance(text, term) / longest)


def _weighted_fields(record: SearchIndexRecord) -> Iterator[tuple[str, str, float]]:
    """Yield (field name, lowercase value, weight) for every scored value."""
    yield "title", record.title.lower(), TITLE_WEIGHT
    if record.description:
        yield "description", record.description.lower(), DESCRIPTION_WEIGHT
    for tag in record.tags:
        yield "tags", tag.lower(), TAG_WEIGHT
    for text in record.block_texts:
        yield "content", text.lower(), BLOCK_TEXT_WEIGHT
    if record.category:
        yield "category", record.category.lower(), CATEGORY_WEIGHT
    yield "author", record.author.lower(), AUTHOR_WEIGHT


def query_terms(query: str | None) -> list[str]:
    """Split a query into lowercase whitespace-separated terms."""
    return (query or "").lower().split()


def relevance_score(
    record: SearchIndexRecord,
    query: str | None,
    fuzzy: bool = False,
) -> float:
    """Score how well a record matches a free-text query.

    Args:
        record: Search record to score.
        query: Raw query text.
        fuzzy: Scale each contribution by fuzzy similarity.

    Returns:
        Additive score across matching fields, or exactly 1.0 when the
        query has no terms.
    """
    terms = query_terms(query)
    if not terms:
        return 1.0

    score = 0.0
    for _, value, weight in _weighted_fields(record):
        for term in terms:
            if term in value:
                score += fuzzy_similarity(value, term) * weight if fuzzy else weight
    return score


def collect_highlights(record: SearchIndexRecord, query: str | None) -> list[Highlight]:
    """List the query terms found in each field of a record.

    Args:
        record: Search record that was scored.
        query: Raw query text.

    Returns:
        One highlight per field with at least one matching term, in scoring
        order. Empty when the query has no terms.
    """
    terms = query_terms(query)
    found: dict[str, list[str]] = {}
    for name, value, _ in _weighted_fields(record):
        for term in terms:
            if term in value and term not in found.setdefault(name, []):
                found[name].append(term)
    return [Highlight(field=name, matches=matches) for name, matches in found.items() if matches]
