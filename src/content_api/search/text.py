"""Searchable text extraction from content blocks."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from content_api.search.schemas import (
    Block,
    CodeBlock,
    CustomBlock,
    DividerBlock,
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
    UnknownBlock,
)

_HTML_TAG = re.compile(r"<[^>]*>")


def strip_html(text: str) -> str:
    """Remove HTML tags and surrounding whitespace.

    Args:
        text: Raw text that may contain markup.

    Returns:
        Text with every ``<...>`` tag removed, trimmed.
    """
    return _HTML_TAG.sub("", text).strip()


@dataclass
class BlockSummary:
    """Text and signals extracted from a block list.

    Attributes:
        texts: Searchable strings in block order.
        types: Kind tag of every block, duplicates included.
        has_images: At least one image block is present.
        has_code: At least one code block is present.
        has_quotes: At least one quote block is present.
        has_lists: At least one list block is present.
    """

    texts: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    has_images: bool = False
    has_code: bool = False
    has_quotes: bool = False
    has_lists: bool = False


def extract_block_texts(blocks: Iterable[Block]) -> BlockSummary:
    """Walk a block list and collect its searchable text.

    Paragraph, heading and custom markup is HTML-stripped; image alt and
    caption, code, quote text and author, and string list items are kept
    verbatim. Dividers and unknown kinds contribute only their tag.

    Args:
        blocks: Validated content blocks in document order.

    Returns:
        BlockSummary for the whole list.
    """
    summary = BlockSummary()

    for block in blocks:
        summary.types.append(block.block_type)

        match block:
            case ParagraphBlock(data=data) | HeadingBlock(data=data):
                if data.text:
                    summary.texts.append(strip_html(data.text))
            case ImageBlock(data=data):
                summary.has_images = True
                summary.texts.extend(t for t in (data.alt, data.caption) if t)
            case CodeBlock(data=data):
                summary.has_code = True
                if data.code:
                    summary.texts.append(data.code)
            case QuoteBlock(data=data):
                summary.has_quotes = True
                summary.texts.extend(t for t in (data.text, data.author) if t)
            case ListBlock(data=data):
                summary.has_lists = True
                summary.texts.extend(i for i in data.items if isinstance(i, str))
            case CustomBlock(data=data):
                if data.html:
                    summary.texts.append(strip_html(data.html))
            case DividerBlock() | UnknownBlock():
                pass

    return summary
