"""Contracts-domain exports."""

from wikilinks.contracts.config import RewriteConfig
from wikilinks.contracts.exceptions import (
    ConfigError,
    InvalidIgnoreFilterFormatError,
    InvalidIgnoreFilterRuleError,
    WikiLinksError,
)
from wikilinks.contracts.link_info import MARKDOWN_MIME_TYPES, LinkInfo, LocalLinkInfo, ProbeResult, RemoteLinkInfo
from wikilinks.contracts.rewrite import DocumentRewrite, RewriteResult

__all__ = [
    "MARKDOWN_MIME_TYPES",
    "ConfigError",
    "DocumentRewrite",
    "InvalidIgnoreFilterFormatError",
    "InvalidIgnoreFilterRuleError",
    "LinkInfo",
    "LocalLinkInfo",
    "ProbeResult",
    "RemoteLinkInfo",
    "RewriteConfig",
    "RewriteResult",
    "WikiLinksError",
]
