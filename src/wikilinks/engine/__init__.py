"""Rewrite engine exports."""

from wikilinks.engine.progress import NullRewriteProgress, RewriteProgress
from wikilinks.engine.replacer import LinkReplacer
from wikilinks.engine.runner import find_markdown_files, rewrite_directory

__all__ = ["LinkReplacer", "NullRewriteProgress", "RewriteProgress", "find_markdown_files", "rewrite_directory"]
