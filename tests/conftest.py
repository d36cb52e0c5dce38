"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from content_api.app import create_app
from content_api.config import Settings
from content_api.search.schemas import ContentItem

RawItem = dict[str, Any]


def raw_item(item_id: str, title: str, **overrides: Any) -> RawItem:
    """Build a camelCase content payload as the CMS REST layer sends it."""
    payload: RawItem = {
        "id": item_id,
        "title": title,
        "description": None,
        "contentType": "blog",
        "status": "published",
        "featured": False,
        "category": None,
        "tags": [],
        "author": "Ada Lovelace",
        "createdAt": "2024-01-10T09:00:00Z",
        "updatedAt": "2024-01-11T09:00:00Z",
        "publishedDate": "2024-01-12T09:00:00Z",
        "contentBlocks": [],
    }
    payload.update(overrides)
    return payload


def paragraph(text: str) -> RawItem:
    """Paragraph block payload."""
    return {"blockType": "PARAGRAPH", "data": {"text": text}}


@pytest.fixture
def make_raw() -> Callable[..., RawItem]:
    """Factory for camelCase content payloads."""
    return raw_item


@pytest.fixture
def make_item() -> Callable[..., ContentItem]:
    """Factory for validated content items."""

    def _make(item_id: str, title: str, **overrides: Any) -> ContentItem:
        return ContentItem.model_validate(raw_item(item_id, title, **overrides))

    return _make


@pytest.fixture
def rust_collection(make_item: Callable[..., ContentItem]) -> list[ContentItem]:
    """Two Rust posts, a cooking note, and a post mentioning rust only in its body."""
    return [
        make_item("1", "Intro to Rust", tags=["rust", "systems"], category="programming"),
        make_item("2", "Rust Ownership", tags=["rust"], createdAt="2024-02-01T00:00:00Z"),
        make_item(
            "3",
            "Cooking Pasta",
            contentType="note",
            category="food",
            createdAt="2023-12-01T00:00:00Z",
        ),
        make_item(
            "4",
            "Garden Tools",
            contentType="note",
            contentBlocks=[paragraph("Keep the shears free of rust.")],
            createdAt="2023-11-01T00:00:00Z",
        ),
    ]


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        host="127.0.0.1",
        port=8000,
        debug=True,
        key="",
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """Create test client with configured app."""
    app = create_app(settings)
    return TestClient(app)
