"""Link descriptor creator contract."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from wikilinks.contracts.link_info import LinkInfo

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def is_remote_link(link: str) -> bool:
    """True for absolute ``scheme://`` URLs and protocol-relative ``//`` links."""
    return bool(_SCHEME_RE.match(link)) or link.startswith("//")


class LinkInfoCreator(ABC):
    @abstractmethod
    async def create(self, link: str, base: str | None = None) -> LinkInfo: ...  # pragma: no cover
