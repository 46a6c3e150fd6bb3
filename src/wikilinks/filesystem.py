"""Filesystem helpers for resolving local links.

Links found in Markdown are URL-ish: they may be percent-encoded, carry a
query or fragment, or point at files whose names literally contain ``?`` or
``#``. The helpers here turn such a link into the best matching path on disk
and back into a canonical, extension-less link.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

# Leading-byte signatures, checked in order. Offsets are relative to the start of the file.
_SIGNATURES: tuple[tuple[int, bytes, str], ...] = (
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (8, b"WEBP", "image/webp"),
    (0, b"BM", "image/bmp"),
    (0, b"%PDF-", "application/pdf"),
    (0, b"PK\x03\x04", "application/zip"),
    (0, b"\x1f\x8b", "application/gzip"),
    (0, b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (0, b"Rar!\x1a\x07", "application/vnd.rar"),
    (0, b"\x00\x00\x01\x00", "image/x-icon"),
    (0, b"OggS", "audio/ogg"),
    (0, b"fLaC", "audio/flac"),
    (0, b"ID3", "audio/mpeg"),
    (4, b"ftyp", "video/mp4"),
    (0, b"\x7fELF", "application/x-elf"),
    (0, b"wOFF", "font/woff"),
    (0, b"wOF2", "font/woff2"),
)
_SNIFF_LENGTH = 16

_MIME_TYPES = mimetypes.MimeTypes()
for _extension in (".md", ".markdown", ".mdown", ".mkdn", ".mkd", ".mdwn"):
    _MIME_TYPES.add_type("text/markdown", _extension)


@dataclass(frozen=True)
class ParsedLink:
    """A local link split into its path, query and fragment components."""

    path: str
    query: str | None = None
    fragment: str | None = None


@dataclass(frozen=True)
class CandidatePath:
    """The path a link resolved to, and which link components the path consumed."""

    path: str
    consumed_query: bool = False
    consumed_fragment: bool = False
    matched: bool = True


def _sniff_mime_type(path: str) -> str | None:
    try:
        with open(path, "rb") as handle:
            header = handle.read(_SNIFF_LENGTH)
    except (OSError, ValueError):
        return None

    for offset, signature, mime_type in _SIGNATURES:
        if header[offset : offset + len(signature)] == signature:
            if signature == b"WEBP" and not header.startswith(b"RIFF"):
                continue
            return mime_type
    return None


def detect_mime_type(path: str | os.PathLike[str]) -> str:
    """Detect the MIME type of *path*.

    Binary signatures win; otherwise the extension decides. Never raises.
    """
    path = os.fspath(path)
    sniffed = _sniff_mime_type(path)
    if sniffed:
        return sniffed

    suffix = os.path.splitext(path)[1]
    if not suffix:
        return DEFAULT_MIME_TYPE
    mime_type, _ = _MIME_TYPES.guess_type(f"file{suffix.lower()}", strict=False)
    return mime_type or DEFAULT_MIME_TYPE


def get_extension(path: str | None) -> str | None:
    """Return the extension of the last path segment without its dot.

    ``None`` when there is no extension, the name ends with a dot, or the
    candidate extension still contains ``?`` or ``#``.
    """
    if not path:
        return None

    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, extension = name.rpartition(".")
    if not dot or not stem.strip(".") or not extension:
        return None
    if "?" in extension or "#" in extension:
        return None
    return extension


def parse_link(link: str) -> ParsedLink | None:
    """Split a local link into path, query and fragment.

    The link is treated as a relative reference, so ``special:name.md`` keeps
    its colon as part of the path. Returns ``None`` when the link cannot be
    parsed.
    """
    if not link or any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in link):
        return None

    remainder, _, fragment = link.partition("#")
    path, _, query = remainder.partition("?")
    return ParsedLink(
        path=path,
        query=f"?{query}" if query else None,
        fragment=f"#{fragment}" if fragment else None,
    )


def decode_path(path: str) -> str | None:
    """Percent-decode *path*, or return ``None`` when it holds invalid escapes."""
    try:
        return unquote(path, errors="strict")
    except UnicodeDecodeError:
        return None


def _join_base(path: str, base: str | None) -> str:
    if base:
        # Resolve like a URL path against the base root; ".." never climbs above it.
        clamped = posixpath.normpath(f"/{path}").lstrip("/")
        return f"{base.rstrip('/')}/{clamped}"
    return path


def resolve_candidate_path(link: str, base: str | None = None) -> CandidatePath:
    """Find the file on disk a link most likely refers to.

    Candidates are tried in order: the raw path, the percent-decoded path, then
    the raw and decoded paths with the query or fragment appended (for files
    whose names literally contain ``?`` or ``#``). When nothing exists the
    link itself is returned with ``matched=False``.
    """
    parsed = parse_link(link)
    if parsed is None:
        return CandidatePath(path=link, matched=False)

    paths = [parsed.path]
    decoded = decode_path(parsed.path)
    if decoded is not None and decoded != parsed.path:
        paths.append(decoded)

    candidates = [CandidatePath(_join_base(path, base)) for path in paths]
    for path in paths:
        if parsed.query:
            candidates.append(CandidatePath(_join_base(f"{path}{parsed.query}", base), consumed_query=True))
        if parsed.fragment:
            suffix = f"{parsed.query or ''}{parsed.fragment}"
            candidates.append(
                CandidatePath(
                    _join_base(f"{path}{suffix}", base),
                    consumed_query=parsed.query is not None,
                    consumed_fragment=True,
                )
            )

    for candidate in candidates:
        if os.path.exists(candidate.path):
            logger.debug("Resolved %s to %s", link, candidate.path)
            return candidate

    return CandidatePath(path=link, matched=False)


def strip_extension_and_reencode(
    path: str,
    extension: str | None,
    query: str | None,
    fragment: str | None,
    base: str | None = None,
) -> str | None:
    """Build the canonical link for *path* without its extension.

    The result is relative to *base*, percent-encoded as a URI component with
    ``/`` kept, and carries *query* and *fragment* again. Returns ``None`` when
    *path* does not lie under *base*.
    """
    if not path:
        return path

    stripped = path
    if base:
        real_base = Path(os.path.abspath(base))
        real_path = Path(os.path.abspath(path))
        try:
            stripped = real_path.relative_to(real_base).as_posix()
        except ValueError:
            logger.debug("%s is outside %s; not rewriting", path, base)
            return None

    if extension and stripped.endswith(f".{extension}"):
        stripped = stripped[: -len(extension) - 1]

    rewritten = quote(stripped, safe="/!'()*~")
    if query:
        rewritten += query
    if fragment:
        rewritten += fragment
    return rewritten
