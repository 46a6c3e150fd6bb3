"""Descriptor creation for links that point at the local filesystem."""

from __future__ import annotations

import logging
import os

from wikilinks.contracts.link_info import LocalLinkInfo
from wikilinks.filesystem import (
    detect_mime_type,
    get_extension,
    parse_link,
    resolve_candidate_path,
    strip_extension_and_reencode,
)
from wikilinks.link_info.base import LinkInfoCreator

logger = logging.getLogger(__name__)


class LocalLinkInfoCreator(LinkInfoCreator):
    async def create(self, link: str, base: str | None = None) -> LocalLinkInfo:
        candidate = resolve_candidate_path(link, base)
        real_file_name = candidate.path
        if base:
            # An unmatched link is only ever checked under the base, never the working directory.
            exists = candidate.matched
        else:
            exists = os.path.exists(real_file_name)
        extension = get_extension(real_file_name)

        parsed = parse_link(link)
        if parsed is None or (not candidate.matched and exists):
            # Either unparsable, or the literal link names an existing file.
            query = fragment = None
        else:
            query = None if candidate.consumed_query else parsed.query
            fragment = None if candidate.consumed_fragment else parsed.fragment

        file_name_without_extension = None
        if exists:
            file_name_without_extension = strip_extension_and_reencode(
                real_file_name, extension, query, fragment, base
            )

        info = LocalLinkInfo(
            link=link,
            exists=exists,
            mime_type=detect_mime_type(real_file_name),
            query=query,
            fragment=fragment,
            real_file_name=real_file_name,
            extension=extension,
            file_name_without_extension=file_name_without_extension,
        )
        logger.debug("Local link %s: exists=%s mime=%s", link, info.exists, info.mime_type)
        return info
