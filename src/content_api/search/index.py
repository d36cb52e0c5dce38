"""Index construction: content items to flat search records."""

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog
from pydantic import ValidationError

from content_api.search.schemas import ContentItem, SearchIndexRecord
from content_api.search.text import extract_block_texts

logger = structlog.get_logger()

WORDS_PER_MINUTE = 200

_WHITESPACE = re.compile(r"\s+")


class ContentValidationError(Exception):
    """Raised when a raw content item cannot be turned into a ContentItem."""

    def __init__(
        self,
        message: str,
        position: int,
        item_id: object,
        validation_error: ValidationError,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error description.
            position: Index of the offending item in the input collection.
            item_id: The item's raw id, if it had one.
            validation_error: Pydantic validation error details.
        """
        super().__init__(message)
        self.position = position
        self.item_id = item_id
        self.validation_error = validation_error


def parse_content(raw_items: Iterable[Mapping[str, Any]]) -> list[ContentItem]:
    """Validate raw content mappings (camelCase or snake_case keys).

    Args:
        raw_items: Content items as decoded from JSON.

    Returns:
        Validated content items, input order preserved.

    Raises:
        ContentValidationError: On the first item that fails validation,
            e.g. a missing or unparseable timestamp.
    """
    items: list[ContentItem] = []
    for position, raw in enumerate(raw_items):
        try:
            items.append(ContentItem.model_validate(raw))
        except ValidationError as e:
            item_id = raw.get("id") if isinstance(raw, Mapping) else None
            raise ContentValidationError(
                f"Invalid content item at position {position} (id={item_id!r})",
                position,
                item_id,
                e,
            ) from e
    return items


def count_words(text: str) -> int:
    """Count whitespace-delimited words, never returning less than 1.

    Args:
        text: Text to count.

    Returns:
        Number of words, floored at 1 so empty content still reads as one word.
    """
    return max(1, len(_WHITESPACE.split(text.strip())))


def reading_time(word_count: int) -> int:
    """Minutes needed to read ``word_count`` words, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def build_record(item: ContentItem) -> SearchIndexRecord:
    """Flatten one content item into its search record.

    Args:
        item: Validated content item.

    Returns:
        Search record with extracted block text and derived signals.
    """
    blocks = extract_block_texts(item.content_blocks)
    full_text = " ".join([item.title, item.description or "", *blocks.texts])
    words = count_words(full_text)

    return SearchIndexRecord(
        id=item.id,
        title=item.title,
        description=item.description,
        content_type=item.content_type,
        status=item.status,
        featured=item.featured,
        category=item.category,
        tags=list(item.tags),
        author=item.author,
        created_at=item.created_at,
        updated_at=item.updated_at,
        published_date=item.published_date,
        block_texts=blocks.texts,
        block_types=blocks.types,
        word_count=words,
        reading_time=reading_time(words),
        has_images=blocks.has_images,
        has_code=blocks.has_code,
        has_quotes=blocks.has_quotes,
        has_lists=blocks.has_lists,
    )


def build_index(items: Sequence[ContentItem]) -> list[SearchIndexRecord]:
    """Build search records for a content snapshot, order preserved."""
    records = [build_record(item) for item in items]
    logger.debug("search_index_built", record_count=len(records))
    return records
