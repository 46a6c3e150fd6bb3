"""Classify links and memoize their descriptors for one run."""

from __future__ import annotations

import inspect
import logging

from wikilinks.cache import CacheManager
from wikilinks.contracts.link_info import LinkInfo
from wikilinks.link_info.base import is_remote_link
from wikilinks.link_info.local import LocalLinkInfoCreator
from wikilinks.link_info.remote import RemoteLinkInfoCreator, RemoteProber

logger = logging.getLogger(__name__)


class LinkInfoResolver:
    """Resolves links to descriptors, one resolution per distinct link.

    The cache is keyed by the link string after a literal *base* prefix has
    been removed, so the resolver is meant to serve a single base path per run.
    """

    def __init__(
        self,
        *,
        cache: CacheManager | None = None,
        prober: RemoteProber | None = None,
        local: LocalLinkInfoCreator | None = None,
        remote: RemoteLinkInfoCreator | None = None,
    ) -> None:
        self._cache = cache if cache is not None else CacheManager()
        self._local = local or LocalLinkInfoCreator()
        self._remote = remote or RemoteLinkInfoCreator(prober)
        self._hydrations = CacheManager()

    @property
    def cache(self) -> CacheManager:
        return self._cache

    async def aclose(self) -> None:
        await self._remote.aclose()

    async def resolve(self, link: str, base: str | None = None) -> LinkInfo:
        if base and link.startswith(base):
            link = link[len(base) :]

        creator = self._remote if is_remote_link(link) else self._local
        result = self._cache.remember(link, lambda: creator.create(link, base))
        if inspect.isawaitable(result):
            result = await result
        return result

    async def hydrate(self, info: LinkInfo) -> LinkInfo:
        """Probe a remote descriptor once and cache the populated copy.

        Local descriptors are returned unchanged.
        """
        if info.is_local:
            return info
        result = self._hydrations.remember(info.link, lambda: self._remote.hydrate(info))
        if inspect.isawaitable(result):
            result = await result
        self._cache.set(info.link, result)
        return result
