"""Serialize search results for download."""

import csv
import io
import json
from collections.abc import Sequence

from content_api.search.schemas import ContentItem

CSV_HEADERS = ("ID", "Title", "Type", "Status", "Author", "Created")


def results_to_json(items: Sequence[ContentItem]) -> str:
    """Pretty-printed JSON array of content items using wire field names."""
    payload = [item.model_dump(mode="json", by_alias=True) for item in items]
    return json.dumps(payload, indent=2)


def results_to_csv(items: Sequence[ContentItem]) -> str:
    """CSV summary of content items, one row per item.

    Args:
        items: Content items in result order.

    Returns:
        CSV text with a header row; the created column is a plain
        ``YYYY-MM-DD`` date.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for item in items:
        writer.writerow(
            (
                item.id,
                item.title,
                item.content_type,
                item.status or "",
                item.author,
                item.created_at.date().isoformat(),
            )
        )
    return buffer.getvalue()
