"""Rewrite Markdown links to local Markdown files without their extension."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import PurePath

from wikilinks.contracts.rewrite import DocumentRewrite
from wikilinks.ignore_filter import IgnoreFilter
from wikilinks.link_info import LinkInfoResolver
from wikilinks.markdown import MarkdownDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _LinkOutcome:
    url: str
    ignored: bool = False
    broken: bool = False


class LinkReplacer:
    """Transforms documents so links to local Markdown files work on a wiki.

    Args:
        base_path: Directory local links are resolved against.
        resolver: Link resolver; share one per run so lookups are cached.
        ignore_filter: Rules exempting links in specific files.
        check_remote: Probe remote links and report those that do not resolve.
    """

    def __init__(
        self,
        base_path: str | PurePath,
        *,
        resolver: LinkInfoResolver | None = None,
        ignore_filter: IgnoreFilter | None = None,
        check_remote: bool = False,
    ) -> None:
        self._base_path = str(base_path)
        self._resolver = resolver or LinkInfoResolver()
        self._ignore_filter = ignore_filter
        self._check_remote = check_remote

    @property
    def resolver(self) -> LinkInfoResolver:
        return self._resolver

    async def transform(self, text: str, file_path: str | PurePath = "") -> str:
        """Return *text* with every eligible link rewritten."""
        return (await self.rewrite(text, file_path)).text

    async def rewrite(self, text: str, file_path: str | PurePath = "") -> DocumentRewrite:
        document = MarkdownDocument.parse(text)
        nodes = document.links
        if not nodes:
            return DocumentRewrite(original=text, text=text)

        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._evaluate(node.url, file_path)) for node in nodes]

        result = DocumentRewrite(original=text, text=text)
        for node, task in zip(nodes, tasks, strict=True):
            outcome = task.result()
            if outcome.ignored:
                result.ignored_links.append(node.url)
            if outcome.broken:
                result.broken_remote_links.append(node.url)
            if outcome.url != node.url:
                result.rewritten_links.append((node.url, outcome.url))
                node.url = outcome.url

        if result.rewritten_links:
            result.text = document.render()
        return result

    async def process_link(self, link: str, file_path: str | PurePath = "") -> str:
        """Return the rewritten form of a single *link*, or *link* itself."""
        return (await self._evaluate(link, file_path)).url

    async def _evaluate(self, link: str, file_path: str | PurePath) -> _LinkOutcome:
        if self._ignore_filter is not None and self._ignore_filter.should_ignore(link, file_path):
            return _LinkOutcome(link, ignored=True)

        try:
            info = await self._resolver.resolve(link, self._base_path)
            if self._check_remote and not info.is_local:
                info = await self._resolver.hydrate(info)
        except (OSError, ValueError) as exc:
            logger.warning("Could not evaluate link %s in %s: %s", link, file_path, exc)
            return _LinkOutcome(link)

        if not info.is_local:
            if self._check_remote and not info.exists:
                logger.warning(
                    "Broken remote link %s in %s (status=%s, error=%s)", link, file_path, info.status_code, info.error
                )
                return _LinkOutcome(link, broken=True)
            return _LinkOutcome(link)

        if not info.exists or not info.is_markdown or not info.file_name_without_extension:
            return _LinkOutcome(link)

        logger.debug("Rewriting %s -> %s in %s", link, info.file_name_without_extension, file_path)
        return _LinkOutcome(info.file_name_without_extension)
