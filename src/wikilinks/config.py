"""Build a :class:`RewriteConfig` from CLI arguments and the environment.

Values not given explicitly fall back to GitHub Actions style inputs
(``INPUT_PATH``, ``INPUT_IGNORE-FILTER``) so the tool runs unchanged as an
action step.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from wikilinks.contracts.config import DEFAULT_TIMEOUT, RewriteConfig
from wikilinks.contracts.exceptions import ConfigError
from wikilinks.ignore_filter import load_ignore_filter

PATH_ENV = "INPUT_PATH"
IGNORE_FILTER_ENV = "INPUT_IGNORE-FILTER"


def load_config(
    *,
    path: str | Path | None = None,
    ignore_filter: str | None = None,
    ignore_filter_file: str | Path | None = None,
    dry_run: bool = False,
    check_remote: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
    verbose: bool = False,
    environ: Mapping[str, str] | None = None,
) -> RewriteConfig:
    """Resolve and validate run settings.

    Raises:
        ConfigError: The path is missing or not a directory, or the ignore
            filter is unreadable or invalid. Ignore-filter problems surface as
            the more specific ``InvalidIgnoreFilter*Error`` subclasses.
    """
    env = os.environ if environ is None else environ

    raw_path = path if path is not None else env.get(PATH_ENV, "").strip()
    if not raw_path:
        raise ConfigError(f"a path is required (pass PATH or set {PATH_ENV})")
    root = Path(raw_path).expanduser()
    if not root.is_dir():
        raise ConfigError(f"path is not a directory: {root}")

    if ignore_filter is None and ignore_filter_file is None:
        ignore_filter = env.get(IGNORE_FILTER_ENV) or None
    rules = load_ignore_filter(ignore_filter, ignore_filter_file).rules

    try:
        return RewriteConfig(
            path=root,
            ignore_rules=rules,
            dry_run=dry_run,
            check_remote=check_remote,
            timeout=timeout,
            verbose=verbose,
        )
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
