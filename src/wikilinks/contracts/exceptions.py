"""Exception hierarchy for wikilinks.

All wikilinks exceptions inherit from :class:`WikiLinksError`. Only
configuration failures are raised to callers; problems with individual links
are captured on the link descriptor instead.
"""

from __future__ import annotations


class WikiLinksError(Exception):
    """Base exception for all wikilinks errors."""


class ConfigError(WikiLinksError):
    """Configuration loading or validation failure."""


class InvalidIgnoreFilterFormatError(ConfigError):
    """The ignore-filter document is not a mapping of link patterns to file patterns."""

    def __init__(
        self,
        message: str = (
            "Invalid ignore-filter format: must be a YAML object with link patterns as keys "
            "and file patterns as values"
        ),
    ) -> None:
        super().__init__(message)


class InvalidIgnoreFilterRuleError(ConfigError):
    """An ignore-filter rule is not allowed.

    Attributes:
        rule: The offending ``link:file`` pattern pair.
        reason: Why the rule is rejected.
    """

    def __init__(self, rule: str, reason: str) -> None:
        self.rule = rule
        self.reason = reason
        super().__init__(f'Invalid ignore filter rule: "{rule}" is not allowed - {reason}')
