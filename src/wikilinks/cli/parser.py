"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from wikilinks.contracts.config import DEFAULT_TIMEOUT


def _package_version() -> str:
    try:
        return version("wikilinks")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wikilinks",
        description="Strip the extension from links to local Markdown files so they work on a wiki.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory containing the Markdown files (default: $INPUT_PATH)",
    )

    ignore = parser.add_mutually_exclusive_group()
    ignore.add_argument(
        "--ignore-filter",
        default=None,
        help="YAML mapping of link glob to file glob(s) whose links are left untouched",
    )
    ignore.add_argument("--ignore-filter-file", default=None, help="Read the ignore filter from a YAML file")

    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing files")
    parser.add_argument("--check-remote", action="store_true", help="Probe remote links and report broken ones")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Seconds allowed per remote probe (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


__all__ = ["build_parser"]
