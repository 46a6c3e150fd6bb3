"""Rewrite result contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class DocumentRewrite(BaseModel):
    original: str
    text: str
    rewritten_links: list[tuple[str, str]] = Field(default_factory=list)
    ignored_links: list[str] = Field(default_factory=list)
    broken_remote_links: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.text != self.original


class RewriteResult(BaseModel):
    files_scanned: int = 0
    files_changed: list[Path] = Field(default_factory=list)
    links_rewritten: int = 0
    links_ignored: int = 0
    broken_remote_links: dict[str, list[str]] = Field(default_factory=dict)
    skipped_files: list[Path] = Field(default_factory=list)
    dry_run: bool = False
