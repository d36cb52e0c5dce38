"""Pydantic schemas for content items, search requests and search responses."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
)
from pydantic.alias_generators import to_camel

logger = structlog.get_logger()


class CamelModel(BaseModel):
    """Base model accepting both camelCase wire names and snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes so all comparisons are tz-aware."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# === Content blocks ===


class BlockType(str, Enum):
    """Kind tags for content blocks."""

    PARAGRAPH = "PARAGRAPH"
    HEADING = "HEADING"
    IMAGE = "IMAGE"
    CODE_BLOCK = "CODE_BLOCK"
    QUOTE = "QUOTE"
    LIST = "LIST"
    DIVIDER = "DIVIDER"
    CUSTOM = "CUSTOM"


_KNOWN_BLOCK_TYPES: frozenset[str] = frozenset(t.value for t in BlockType)


def _or_default(default: Any) -> WrapValidator:
    """Replace a payload value of the wrong type with ``default``.

    Callables are treated as factories so mutable defaults are not shared.
    """

    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return default() if callable(default) else default

    return WrapValidator(validate)


OptionalText = Annotated[str | None, _or_default(None)]


class TextData(CamelModel):
    """Payload for paragraph blocks."""

    text: OptionalText = None


class HeadingData(TextData):
    """Payload for heading blocks."""

    level: Annotated[int, _or_default(2)] = 2


class ImageData(CamelModel):
    """Payload for image blocks."""

    src: OptionalText = None
    alt: OptionalText = None
    caption: OptionalText = None


class CodeData(CamelModel):
    """Payload for code blocks."""

    code: OptionalText = None
    language: Annotated[str, _or_default("text")] = "text"


class QuoteData(CamelModel):
    """Payload for quote blocks."""

    text: OptionalText = None
    author: OptionalText = None
    source: OptionalText = None


class ListData(CamelModel):
    """Payload for list blocks. Items may hold non-string values."""

    type: Annotated[Literal["ordered", "unordered"], _or_default("unordered")] = "unordered"
    items: Annotated[list[Any], _or_default(list)] = Field(default_factory=list)


class DividerData(CamelModel):
    """Payload for divider blocks."""

    style: Annotated[str, _or_default("solid")] = "solid"
    color: Annotated[str, _or_default("#000000")] = "#000000"


class CustomData(CamelModel):
    """Payload for custom HTML blocks."""

    html: OptionalText = None


class _BlockModel(CamelModel):
    """Common behaviour of block variants: a missing payload reads as empty."""

    @field_validator("data", mode="before", check_fields=False)
    @classmethod
    def _payload_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, BaseModel)) else {}


class ParagraphBlock(_BlockModel):
    block_type: Literal["PARAGRAPH"] = "PARAGRAPH"
    data: TextData = Field(default_factory=TextData)


class HeadingBlock(_BlockModel):
    block_type: Literal["HEADING"] = "HEADING"
    data: HeadingData = Field(default_factory=HeadingData)


class ImageBlock(_BlockModel):
    block_type: Literal["IMAGE"] = "IMAGE"
    data: ImageData = Field(default_factory=ImageData)


class CodeBlock(_BlockModel):
    block_type: Literal["CODE_BLOCK"] = "CODE_BLOCK"
    data: CodeData = Field(default_factory=CodeData)


class QuoteBlock(_BlockModel):
    block_type: Literal["QUOTE"] = "QUOTE"
    data: QuoteData = Field(default_factory=QuoteData)


class ListBlock(_BlockModel):
    block_type: Literal["LIST"] = "LIST"
    data: ListData = Field(default_factory=ListData)


class DividerBlock(_BlockModel):
    block_type: Literal["DIVIDER"] = "DIVIDER"
    data: DividerData = Field(default_factory=DividerData)


class CustomBlock(_BlockModel):
    block_type: Literal["CUSTOM"] = "CUSTOM"
    data: CustomData = Field(default_factory=CustomData)


class UnknownBlock(_BlockModel):
    """Block with a kind tag this service does not index.

    The tag is kept so it still shows up in block-kind filters and facets.
    """

    block_type: str
    data: dict[str, Any] = Field(default_factory=dict)


def _raw_kind(value: Any) -> Any:
    """Kind tag of a raw block mapping or an already built block."""
    if isinstance(value, dict):
        kind = value.get("blockType", value.get("block_type"))
    else:
        kind = getattr(value, "block_type", None)
    return getattr(kind, "value", kind)


def _block_tag(value: Any) -> str:
    """Pick the union member for a raw block or an already built block."""
    kind = _raw_kind(value)
    return kind if kind in _KNOWN_BLOCK_TYPES else "UNKNOWN"


Block = Annotated[
    Union[
        Annotated[ParagraphBlock, Tag("PARAGRAPH")],
        Annotated[HeadingBlock, Tag("HEADING")],
        Annotated[ImageBlock, Tag("IMAGE")],
        Annotated[CodeBlock, Tag("CODE_BLOCK")],
        Annotated[QuoteBlock, Tag("QUOTE")],
        Annotated[ListBlock, Tag("LIST")],
        Annotated[DividerBlock, Tag("DIVIDER")],
        Annotated[CustomBlock, Tag("CUSTOM")],
        Annotated[UnknownBlock, Tag("UNKNOWN")],
    ],
    Discriminator(_block_tag),
]

_BLOCK = TypeAdapter(Block)


def _empty_block(raw: Any) -> Block:
    """Payload-less block that keeps the kind tag of an unreadable block."""
    tag = _block_tag(raw)
    if tag != "UNKNOWN":
        return _BLOCK.validate_python({"blockType": tag})
    kind = _raw_kind(raw)
    return UnknownBlock(block_type=str(kind) if kind else "UNKNOWN")


# === Content items ===


class ContentItem(CamelModel):
    """A searchable content entry with its ordered block list.

    Timestamps are required; an unparseable value fails validation.
    Blocks do not: a block that cannot be read is logged and replaced by
    an empty block of the same kind, and a block field that is not a list
    becomes an empty list, so the item stays searchable.
    """

    id: str
    title: str
    description: str | None = None
    content_type: str
    status: str | None = None
    featured: bool = False
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    author: str
    created_at: datetime
    updated_at: datetime
    published_date: datetime
    content_blocks: list[Block] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _default_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("created_at", "updated_at", "published_date")
    @classmethod
    def _timestamps_in_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_validator("content_blocks", mode="before")
    @classmethod
    def _recover_blocks(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return []
        item_id = info.data.get("id")
        if not isinstance(value, list):
            logger.warning(
                "content_blocks_not_a_list",
                item_id=item_id,
                value_type=type(value).__name__,
            )
            return []

        blocks: list[Block] = []
        for position, raw in enumerate(value):
            try:
                blocks.append(_BLOCK.validate_python(raw))
            except ValidationError as e:
                empty = _empty_block(raw)
                logger.warning(
                    "content_block_invalid",
                    item_id=item_id,
                    position=position,
                    block_type=empty.block_type,
                    error_count=e.error_count(),
                )
                blocks.append(empty)
        return blocks


class SearchIndexRecord(BaseModel):
    """Flattened, denormalized view of a content item used for matching.

    Attributes:
        block_texts: Searchable text pulled out of the item's blocks.
        block_types: Kind tag of every block, in block order.
        word_count: Whitespace tokens across title, description and blocks.
        reading_time: Minutes at the configured reading speed, rounded up.
    """

    id: str
    title: str
    description: str | None = None
    content_type: str
    status: str | None = None
    featured: bool
    category: str | None = None
    tags: list[str]
    author: str
    created_at: datetime
    updated_at: datetime
    published_date: datetime
    block_texts: list[str]
    block_types: list[str]
    word_count: int = Field(ge=0)
    reading_time: int = Field(ge=0)
    has_images: bool
    has_code: bool
    has_quotes: bool
    has_lists: bool


# === Filters and options ===


class NumericRange(CamelModel):
    """Inclusive numeric bounds, each optional."""

    min: int | None = None
    max: int | None = None


class DateRange(CamelModel):
    """Inclusive datetime bounds, each optional. Naive bounds are UTC."""

    start: datetime | None = None
    end: datetime | None = None

    @field_validator("start", "end")
    @classmethod
    def _bounds_in_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class SearchFilters(CamelModel):
    """Structured filter set. Unset fields impose no constraint.

    Attributes:
        query: Free-text query used for relevance scoring.
        featured: Tri-state; None leaves featured status unconstrained.
        tags: Every tag must substring-match one of the item's tags.
        author: Case-insensitive substring of the item author.
        block_types: Every listed kind must appear in the item.
        has_media: Tri-state on whether the item has image blocks.
    """

    query: str | None = None
    content_type: str | None = None
    status: str | None = None
    featured: bool | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    author: str | None = None
    block_types: list[str] = Field(default_factory=list)
    has_media: bool | None = None
    word_count: NumericRange | None = None
    reading_time: NumericRange | None = None
    created_date_range: DateRange | None = None
    updated_date_range: DateRange | None = None


class SortKey(str, Enum):
    """Available result orderings."""

    RELEVANCE = "relevance"
    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE = "title"
    TITLE_DESC = "title-desc"
    STATUS = "status"
    TYPE = "type"
    AUTHOR = "author"


class SortOrder(str, Enum):
    """Sort direction. DESC keeps each key's natural direction."""

    ASC = "asc"
    DESC = "desc"


class SearchOptions(CamelModel):
    """Sorting, pagination and matching options for a search call."""

    sort_by: SortKey = SortKey.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    offset: int = Field(default=0, ge=0)
    limit: int | None = Field(default=None, ge=1)
    fuzzy_search: bool = True
    highlight_matches: bool = False


# === Results ===


class Highlight(CamelModel):
    """Query terms that matched within one field."""

    field: str
    matches: list[str]


class SearchResult(CamelModel):
    """A matched content item with its relevance score.

    Attributes:
        item: The original content item, not its index record.
        score: Additive relevance score; 1 for an empty query.
        highlights: Per-field matched terms when highlighting is on.
    """

    item: ContentItem
    score: float
    highlights: list[Highlight] | None = None


class SearchResponse(CamelModel):
    """Ranked page of results.

    Attributes:
        results: Results inside the requested pagination window.
        total_count: Filtered result count before pagination.
        search_time: Wall-clock time of the search in milliseconds.
    """

    results: list[SearchResult]
    total_count: int
    search_time: float


class FilterOptions(CamelModel):
    """Distinct facet values observed across a collection."""

    content_types: list[str]
    statuses: list[str]
    categories: list[str]
    tags: list[str]
    authors: list[str]
    block_types: list[str]


# === Request bodies ===


class ContentCollectionRequest(CamelModel):
    """Request carrying a content snapshot."""

    content: list[ContentItem]


class SearchRequest(ContentCollectionRequest):
    """Search request: content snapshot plus filters and options."""

    filters: SearchFilters = Field(default_factory=SearchFilters)
    options: SearchOptions = Field(default_factory=SearchOptions)


class SuggestionRequest(ContentCollectionRequest):
    """Autocomplete request."""

    query: str
    limit: int | None = Field(default=None, ge=1, le=50)


class SuggestionResponse(CamelModel):
    """Autocomplete suggestions in discovery order."""

    suggestions: list[str]


class FilterSummaryRequest(CamelModel):
    """Filters to describe."""

    filters: SearchFilters


class FilterSummaryResponse(CamelModel):
    """Readable description of a filter set."""

    active: bool
    summary: list[str]
