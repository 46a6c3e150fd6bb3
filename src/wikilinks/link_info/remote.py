"""Descriptor creation and probing for remote links."""

from __future__ import annotations

import asyncio
import logging
import re
from types import TracebackType
from urllib.parse import urlsplit

import httpx

from wikilinks.contracts.config import DEFAULT_TIMEOUT
from wikilinks.contracts.link_info import LinkInfo, ProbeResult, RemoteLinkInfo
from wikilinks.filesystem import get_extension
from wikilinks.link_info.base import LinkInfoCreator

_LOG = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r'filename="?([^"]+)"?')
ABORTED_MESSAGE = "operation aborted"


def _file_name_from_url(url: str) -> str:
    path = urlsplit(url).path
    return path.rsplit("/", 1)[-1] or url


def _file_name_from_disposition(header: str) -> str | None:
    match = _FILENAME_RE.search(header)
    if match is None:
        return None
    return match.group(1).split(";", 1)[0].strip() or None


def _mime_type(content_type: str | None) -> str | None:
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower() or None


class RemoteProber:
    """Bounded HEAD probe for remote links.

    Failures never raise; they are reported through :attr:`ProbeResult.error`.
    Use as an async context manager to close the client it creates::

        async with RemoteProber(timeout=5.0) as prober:
            result = await prober.probe("https://example.com/page.md")
    """

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, client: httpx.AsyncClient | None = None) -> None:
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> RemoteProber:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True, timeout=self._timeout)
        return self._client

    async def probe(self, url: str) -> ProbeResult:
        target = f"https:{url}" if url.startswith("//") else url
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._get_client().head(target)
        except (TimeoutError, httpx.TimeoutException):
            _LOG.debug("Probe of %s timed out after %.1fs", url, self._timeout)
            return ProbeResult(real_url=url, error=ABORTED_MESSAGE)
        except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError) as exc:
            _LOG.debug("Probe of %s failed: %s", url, exc)
            return ProbeResult(real_url=url, error=str(exc) or type(exc).__name__)

        disposition = response.headers.get("content-disposition")
        if disposition is not None:
            real_file_name = _file_name_from_disposition(disposition)
        else:
            real_file_name = _file_name_from_url(str(response.url))

        return ProbeResult(
            status_code=response.status_code,
            mime_type=_mime_type(response.headers.get("content-type")),
            real_file_name=real_file_name,
            real_url=str(response.url),
        )


class RemoteLinkInfoCreator(LinkInfoCreator):
    """Classifies remote links without touching the network.

    :meth:`hydrate` runs the probe and returns a new, fully populated descriptor.
    """

    def __init__(self, prober: RemoteProber | None = None) -> None:
        self._prober = prober

    @property
    def prober(self) -> RemoteProber:
        if self._prober is None:
            self._prober = RemoteProber()
        return self._prober

    async def aclose(self) -> None:
        if self._prober is not None:
            await self._prober.aclose()

    async def create(self, link: str, base: str | None = None) -> RemoteLinkInfo:
        del base
        try:
            parts = urlsplit(link)
        except ValueError:
            return RemoteLinkInfo(link=link)
        return RemoteLinkInfo(
            link=link,
            query=f"?{parts.query}" if parts.query else None,
            fragment=f"#{parts.fragment}" if parts.fragment else None,
        )

    async def hydrate(self, info: LinkInfo) -> RemoteLinkInfo:
        result = await self.prober.probe(info.link)
        hydrated = RemoteLinkInfo(
            link=info.link,
            query=info.query,
            fragment=info.fragment,
            exists=result.exists,
            status_code=result.status_code,
            mime_type=result.mime_type,
            real_file_name=result.real_file_name,
            real_url=result.real_url,
            extension=get_extension(result.real_file_name),
            error=result.error,
        )
        if not hydrated.exists:
            _LOG.debug("Remote link %s unavailable (status=%s, error=%s)", info.link, result.status_code, result.error)
        return hydrated
