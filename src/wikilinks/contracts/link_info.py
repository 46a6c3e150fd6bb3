"""Link descriptor contracts.

A :class:`LinkInfo` is the resolved metadata for one link. It is a frozen
pydantic model; the two variants are tagged by ``is_local``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

MARKDOWN_MIME_TYPES = frozenset({"text/markdown", "text/x-markdown", "application/markdown"})


class LinkInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    link: str
    is_local: bool = False
    exists: bool = False
    mime_type: str | None = None
    query: str | None = None
    fragment: str | None = None
    real_file_name: str | None = None
    extension: str | None = None
    file_name_without_extension: str | None = None
    real_url: str | None = None
    status_code: int = 0
    error: str | None = None

    @field_validator("query", "fragment", mode="before")
    @classmethod
    def _empty_component_is_none(cls, value: str | None) -> str | None:
        return value or None

    @property
    def is_markdown(self) -> bool:
        return self.mime_type in MARKDOWN_MIME_TYPES


class LocalLinkInfo(LinkInfo):
    """Descriptor for a link that resolves against the filesystem."""

    is_local: Literal[True] = True


class RemoteLinkInfo(LinkInfo):
    """Descriptor for an absolute or protocol-relative URL.

    Network fields keep their defaults until the descriptor is hydrated by a
    probe, which produces a new instance.
    """

    is_local: Literal[False] = False


class ProbeResult(BaseModel):
    """Outcome of a bounded HEAD request against a remote link."""

    status_code: int = 0
    mime_type: str | None = None
    real_file_name: str | None = None
    real_url: str | None = None
    error: str | None = None

    @property
    def exists(self) -> bool:
        return 200 <= self.status_code < 300 and self.error is None
