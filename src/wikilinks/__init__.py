"""Public API surface for wikilinks."""

__version__ = "1.0.0"

from wikilinks.cache import CacheManager
from wikilinks.config import load_config
from wikilinks.contracts.config import RewriteConfig
from wikilinks.contracts.exceptions import (
    ConfigError,
    InvalidIgnoreFilterFormatError,
    InvalidIgnoreFilterRuleError,
    WikiLinksError,
)
from wikilinks.contracts.link_info import LinkInfo, LocalLinkInfo, ProbeResult, RemoteLinkInfo
from wikilinks.contracts.rewrite import DocumentRewrite, RewriteResult
from wikilinks.engine import LinkReplacer, NullRewriteProgress, RewriteProgress, rewrite_directory
from wikilinks.ignore_filter import IgnoreFilter, load_ignore_filter, parse_ignore_rules
from wikilinks.link_info import LinkInfoResolver, RemoteProber, is_remote_link
from wikilinks.markdown import LinkNode, MarkdownDocument

__all__ = [
    "CacheManager",
    "ConfigError",
    "DocumentRewrite",
    "IgnoreFilter",
    "InvalidIgnoreFilterFormatError",
    "InvalidIgnoreFilterRuleError",
    "LinkInfo",
    "LinkInfoResolver",
    "LinkNode",
    "LinkReplacer",
    "LocalLinkInfo",
    "MarkdownDocument",
    "NullRewriteProgress",
    "ProbeResult",
    "RemoteLinkInfo",
    "RemoteProber",
    "RewriteConfig",
    "RewriteProgress",
    "RewriteResult",
    "WikiLinksError",
    "__version__",
    "is_remote_link",
    "load_config",
    "load_ignore_filter",
    "parse_ignore_rules",
    "rewrite_directory",
]
