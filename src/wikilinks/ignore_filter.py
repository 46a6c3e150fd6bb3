"""Ignore rules: which links in which files are exempt from rewriting."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePath
from typing import Any

import yaml

from wikilinks.contracts.exceptions import ConfigError, InvalidIgnoreFilterFormatError, InvalidIgnoreFilterRuleError

logger = logging.getLogger(__name__)

# Link pattern -> file pattern pairs that would disable the tool entirely.
_FORBIDDEN_RULES: dict[str, str] = {
    "*": "it would ignore all links",
    "*.md": "it would ignore all markdown links",
}


def _as_pattern_list(value: Any) -> list[str] | None:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    return None


class IgnoreFilter:
    """Glob rules mapping a link pattern to the file patterns it applies in.

    A link is ignored when any link pattern matches it and one of that
    pattern's file patterns matches the file containing it.
    """

    def __init__(self, rules: Mapping[str, str | Iterable[str]] | None = None) -> None:
        self._rules: dict[str, list[str]] = {}
        for link_pattern, file_patterns in (rules or {}).items():
            patterns = self._rules.setdefault(link_pattern, [])
            if isinstance(file_patterns, str):
                patterns.append(file_patterns)
            else:
                patterns.extend(file_patterns)

    def __bool__(self) -> bool:
        return bool(self._rules)

    @property
    def rules(self) -> dict[str, list[str]]:
        return {pattern: list(files) for pattern, files in self._rules.items()}

    def should_ignore(self, link: str, file_path: str | PurePath) -> bool:
        path = file_path.as_posix() if isinstance(file_path, PurePath) else str(file_path)
        for link_pattern, file_patterns in self._rules.items():
            if not fnmatch.fnmatchcase(link, link_pattern):
                continue
            for file_pattern in file_patterns:
                if fnmatch.fnmatchcase(path, file_pattern):
                    logger.debug("Ignoring %s in %s (rule %s: %s)", link, path, link_pattern, file_pattern)
                    return True
        return False


def parse_ignore_rules(text: str | None) -> dict[str, list[str]]:
    """Parse and validate an ignore-filter YAML document.

    Raises:
        InvalidIgnoreFilterFormatError: The document is not a mapping of link
            patterns to a file pattern or a list of file patterns.
        InvalidIgnoreFilterRuleError: A rule would ignore every link, or every
            Markdown link.
    """
    if text is None or not text.strip():
        return {}

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidIgnoreFilterFormatError(f"Invalid ignore-filter format: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise InvalidIgnoreFilterFormatError()

    rules: dict[str, list[str]] = {}
    for link_pattern, file_pattern in parsed.items():
        patterns = _as_pattern_list(file_pattern)
        if not isinstance(link_pattern, str) or patterns is None:
            raise InvalidIgnoreFilterFormatError()

        reason = _FORBIDDEN_RULES.get(link_pattern)
        if reason is not None and link_pattern in patterns:
            raise InvalidIgnoreFilterRuleError(f"{link_pattern}:{link_pattern}", reason)

        rules.setdefault(link_pattern, []).extend(patterns)
    return rules


def load_ignore_filter(text: str | None = None, path: str | Path | None = None) -> IgnoreFilter:
    """Build an :class:`IgnoreFilter` from inline YAML or a YAML file."""
    if path is not None:
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"failed reading ignore-filter file: {path}") from exc
    return IgnoreFilter(parse_ignore_rules(text))
