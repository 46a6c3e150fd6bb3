"""Shared test fixtures for wikilinks tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from wikilinks.cache import CacheManager
from wikilinks.link_info import LinkInfoResolver

PNG_HEADER = bytes([137, 80, 78, 71, 13, 10, 26, 10])


@pytest.fixture
def wiki_dir(tmp_path: Path) -> Path:
    """A directory laid out like a small wiki checkout."""
    root = tmp_path / "wiki"
    root.mkdir()
    (root / "to-a-file.md").write_text("# To a file\n", encoding="utf-8")
    (root / "special:characters-included.md").write_text("# Special\n", encoding="utf-8")
    (root / "test.md").write_text("# Test\n", encoding="utf-8")
    (root / "notes.txt").write_text("plain text\n", encoding="utf-8")
    (root / "image.png").write_bytes(PNG_HEADER)
    (root / "disguised.md").write_bytes(PNG_HEADER)
    (root / "nested").mkdir()
    (root / "nested" / "nested-markdown.md").write_text("# Nested\n", encoding="utf-8")
    (root / "with space.md").write_text("# Space\n", encoding="utf-8")
    return root


@pytest.fixture
def resolver() -> LinkInfoResolver:
    """A resolver with its own isolated cache."""
    return LinkInfoResolver(cache=CacheManager())
