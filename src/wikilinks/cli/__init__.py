"""Command-line interface for wikilinks."""

from __future__ import annotations

import asyncio
import logging as logging

from wikilinks import load_config as load_config
from wikilinks import rewrite_directory as rewrite_directory
from wikilinks.cli.app import main as main
from wikilinks.cli.commands import rewrite as rewrite_command
from wikilinks.cli.parser import build_parser as build_parser

_format_summary = rewrite_command.format_rewrite_summary
_run_rewrite = rewrite_command.run_rewrite
