"""Markdown document model: parse, enumerate links, serialize.

Parsing is delegated to ``markdown-it-py``. Serialization splices changed
link destinations back into the original source, so everything that is not a
rewritten destination (list markers, emphasis style, fences, whitespace)
comes out byte-for-byte as it went in.
"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass, field
from typing import Any, Literal

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll
from markdown_it.token import Token

logger = logging.getLogger(__name__)

LinkKind = Literal["inline", "definition"]

_LINE_END_RE = re.compile(r"\r\n|\r|\n")


class _SourceMarkdownIt(MarkdownIt):
    """Parser that keeps link destinations exactly as written."""

    def normalizeLink(self, url: str) -> str:  # noqa: N802
        return url


def _build_parser() -> MarkdownIt:
    parser = _SourceMarkdownIt("commonmark", {"store_labels": True, "inline_definitions": True})
    parser.enable(["table", "strikethrough"])
    return parser


@dataclass
class LinkNode:
    """One link destination in a document. Assign :attr:`url` to rewrite it."""

    url: str
    kind: LinkKind = "inline"
    line_range: tuple[int, int] | None = None
    original_url: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not self.original_url:
            self.original_url = self.url

    @property
    def changed(self) -> bool:
        return self.url != self.original_url


def _line_offsets(text: str) -> list[int]:
    offsets = [0]
    offsets.extend(match.end() for match in _LINE_END_RE.finditer(text))
    return offsets


def _source_form(url: str) -> str:
    # A destination char may be written literally, backslash-escaped, or as an entity.
    parts = []
    for char in url:
        options = [re.escape(char)]
        if char in string.punctuation:
            options.append(re.escape(f"\\{char}"))
        options.append(r"&[#A-Za-z0-9]+;")
        parts.append(f"(?:{'|'.join(options)})")
    return "".join(parts)


def _destination_pattern(node: LinkNode) -> re.Pattern[str]:
    destination = _source_form(node.original_url)
    if node.kind == "definition":
        return re.compile(r"^[ \t]*(?:>[ \t]*)*\[(?:[^\]\\]|\\.)*\]:\s*<?(" + destination + r")(?=[\s>]|$)", re.M)
    return re.compile(r"\]\(\s*<?(" + destination + r")(?=[\s>)])")


def _find_destination(node: LinkNode, source: str, start: int, end: int) -> re.Match[str] | None:
    for match in _destination_pattern(node).finditer(source, start, end):
        if unescapeAll(match.group(1)) == node.original_url:
            return match
    return None


class MarkdownDocument:
    def __init__(self, source: str, links: list[LinkNode]) -> None:
        self._source = source
        self._links = links

    @classmethod
    def parse(cls, text: str) -> MarkdownDocument:
        env: dict[str, Any] = {}
        tokens = _build_parser().parse(text, env)
        links: list[LinkNode] = []
        has_definition_tokens = False

        for token in tokens:
            if token.type == "definition":
                has_definition_tokens = True
                url = token.meta.get("url") or ""
                if url:
                    links.append(LinkNode(url=url, kind="definition", line_range=_line_range(token)))
            elif token.type == "inline" and token.children:
                links.extend(_inline_links(token))

        if not has_definition_tokens:
            for reference in env.get("references", {}).values():
                url = reference.get("href") or ""
                line_map = reference.get("map")
                if url:
                    line_range = (line_map[0], line_map[1]) if line_map else None
                    links.append(LinkNode(url=url, kind="definition", line_range=line_range))

        return cls(text, links)

    @property
    def source(self) -> str:
        return self._source

    @property
    def links(self) -> list[LinkNode]:
        return self._links

    def render(self) -> str:
        """Serialize the document with every changed link destination applied."""
        offsets = _line_offsets(self._source)
        cursors: dict[tuple[int, int], int] = {}
        edits: list[tuple[int, int, str]] = []

        for node in self._links:
            start, end = self._region(node, offsets)
            cursor = cursors.get((start, end), start)
            match = _find_destination(node, self._source, cursor, end)
            if match is None:
                if node.changed:
                    logger.debug("Could not locate link destination %r in source; left unchanged", node.original_url)
                continue
            cursors[(start, end)] = match.end(1)
            if node.changed:
                edits.append((match.start(1), match.end(1), node.url))

        rendered = self._source
        for start, end, replacement in sorted(edits, reverse=True):
            rendered = rendered[:start] + replacement + rendered[end:]

        if rendered.endswith("\n") and not self._source.endswith("\n"):
            rendered = rendered[:-1]
        return rendered

    def _region(self, node: LinkNode, offsets: list[int]) -> tuple[int, int]:
        if node.line_range is None:
            return 0, len(self._source)
        first, last = node.line_range
        start = offsets[first] if first < len(offsets) else len(self._source)
        end = offsets[last] if last < len(offsets) else len(self._source)
        return start, end


def _line_range(token: Token) -> tuple[int, int] | None:
    if not token.map:
        return None
    return token.map[0], token.map[1]


def _inline_links(token: Token) -> list[LinkNode]:
    links: list[LinkNode] = []
    line_range = _line_range(token)
    for child in token.children or []:
        if child.type != "link_open":
            continue
        if child.info == "auto" or child.meta.get("label"):
            # Autolinks carry no destination syntax; reference usages are rewritten at their definition.
            continue
        href = child.attrGet("href")
        if isinstance(href, str) and href:
            links.append(LinkNode(url=href, kind="inline", line_range=line_range))
    return links
