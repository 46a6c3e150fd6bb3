"""Run configuration contract."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_FILE_PATTERNS = ("*.md", "*.markdown")
DEFAULT_TIMEOUT = 5.0


class RewriteConfig(BaseModel):
    """Settings for one ``wikilinks`` run.

    Attributes:
        path: Root directory whose Markdown files are rewritten. Also the base
            path local links are resolved against.
        ignore_rules: Link glob to file globs; matching links are left alone.
        file_patterns: Globs selecting which files under *path* are processed.
        dry_run: When *True*, files are rewritten in memory only.
        check_remote: Probe remote links and report the ones that do not resolve.
        timeout: Seconds allowed for each remote probe.
        verbose: Emit debug logging instead of the progress display.
    """

    path: Path
    ignore_rules: dict[str, list[str]] = Field(default_factory=dict)
    file_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_FILE_PATTERNS))
    dry_run: bool = False
    check_remote: bool = False
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    verbose: bool = False
