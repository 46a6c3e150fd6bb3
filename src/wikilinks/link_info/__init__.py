"""Link classification and descriptor creation."""

from wikilinks.link_info.base import LinkInfoCreator, is_remote_link
from wikilinks.link_info.local import LocalLinkInfoCreator
from wikilinks.link_info.remote import RemoteLinkInfoCreator, RemoteProber
from wikilinks.link_info.resolver import LinkInfoResolver

__all__ = [
    "LinkInfoCreator",
    "LinkInfoResolver",
    "LocalLinkInfoCreator",
    "RemoteLinkInfoCreator",
    "RemoteProber",
    "is_remote_link",
]
