"""Directory runner: rewrite every Markdown file under a root path."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path

from wikilinks.contracts.config import RewriteConfig
from wikilinks.contracts.rewrite import DocumentRewrite, RewriteResult
from wikilinks.engine.progress import NullRewriteProgress, RewriteProgress
from wikilinks.engine.replacer import LinkReplacer
from wikilinks.ignore_filter import IgnoreFilter
from wikilinks.link_info import LinkInfoResolver, RemoteProber

logger = logging.getLogger(__name__)

_SKIPPED_DIRECTORIES = frozenset({".git"})


def find_markdown_files(root: Path, patterns: list[str]) -> list[Path]:
    """Return the files under *root* whose name matches one of *patterns*, sorted."""
    files: list[Path] = []
    for path in root.rglob("*"):
        if _SKIPPED_DIRECTORIES.intersection(path.relative_to(root).parts):
            continue
        if path.is_file() and any(fnmatch.fnmatch(path.name, pattern) for pattern in patterns):
            files.append(path)
    return sorted(files)


async def rewrite_directory(
    config: RewriteConfig,
    *,
    replacer: LinkReplacer | None = None,
    progress: RewriteProgress | None = None,
) -> RewriteResult:
    progress = progress or NullRewriteProgress()
    root = config.path

    owns_resolver = replacer is None
    if replacer is None:
        resolver = LinkInfoResolver(prober=RemoteProber(timeout=config.timeout))
        replacer = LinkReplacer(
            root,
            resolver=resolver,
            ignore_filter=IgnoreFilter(config.ignore_rules),
            check_remote=config.check_remote,
        )

    try:
        files = find_markdown_files(root, config.file_patterns)
        logger.debug("Found %d Markdown files under %s", len(files), root)
        progress.files_found(len(files))

        result = RewriteResult(files_scanned=len(files), dry_run=config.dry_run)
        for path in files:
            relative = path.relative_to(root).as_posix()
            document = await _rewrite_file(path, relative, replacer, config, result)
            if document is None:
                progress.file_skipped(relative)
            else:
                progress.file_done(relative, document)
        progress.run_done(result)
    except BaseException as exc:
        progress.run_error(exc)
        raise
    finally:
        if owns_resolver:
            await replacer.resolver.aclose()

    return result


async def _rewrite_file(
    path: Path,
    relative: str,
    replacer: LinkReplacer,
    config: RewriteConfig,
    result: RewriteResult,
) -> DocumentRewrite | None:
    try:
        original = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping %s: %s", path, exc)
        result.skipped_files.append(path)
        return None

    document = await replacer.rewrite(original, relative)
    result.links_rewritten += len(document.rewritten_links)
    result.links_ignored += len(document.ignored_links)
    if document.broken_remote_links:
        result.broken_remote_links[relative] = list(document.broken_remote_links)

    if not document.changed:
        return document

    result.files_changed.append(path)
    if config.dry_run:
        logger.debug("%s would be updated", path)
        return document

    try:
        path.write_bytes(document.text.encode("utf-8"))
    except OSError as exc:
        logger.warning("Could not write %s: %s", path, exc)
        result.files_changed.remove(path)
        result.skipped_files.append(path)
        return None
    logger.debug("%s updated", path)
    return document
