"""Rewrite command execution and formatting."""

from __future__ import annotations

import argparse

from wikilinks import RewriteConfig, RewriteResult
from wikilinks.cli.common import format_count
from wikilinks.cli.progress.rich import RichRewriteProgress


def format_rewrite_summary(result: RewriteResult, config: RewriteConfig) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = [
        "",
        f"wikilinks - rewrite complete ({mode})",
        "",
        f"  Path:      {config.path}",
        f"  Files:     {format_count(result.files_scanned, 'file')} scanned, "
        f"{len(result.files_changed)} changed",
        f"  Links:     {format_count(result.links_rewritten, 'link')} rewritten",
    ]
    if result.links_ignored:
        lines.append(f"  Ignored:   {format_count(result.links_ignored, 'link')}")
    if result.skipped_files:
        lines.append(f"  Skipped:   {format_count(len(result.skipped_files), 'file')}")
        lines.extend(f"    - {path}" for path in result.skipped_files)

    if config.check_remote:
        broken_total = sum(len(links) for links in result.broken_remote_links.values())
        if broken_total:
            lines.append(f"  Broken:    {format_count(broken_total, 'remote link')}")
            for file_name, links in sorted(result.broken_remote_links.items()):
                lines.extend(f"    - {file_name}: {link}" for link in links)
        else:
            lines.append("  Remote:    all remote links reachable")

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No files were written")

    lines.append("")
    return "\n".join(lines)


async def run_rewrite(args: argparse.Namespace) -> RewriteResult:
    import wikilinks.cli as cli

    config = cli.load_config(
        path=args.path,
        ignore_filter=args.ignore_filter,
        ignore_filter_file=args.ignore_filter_file,
        dry_run=args.dry_run,
        check_remote=args.check_remote,
        timeout=args.timeout,
        verbose=args.verbose,
    )

    if not args.verbose:
        with RichRewriteProgress() as progress:
            result = await cli.rewrite_directory(config, progress=progress)
    else:
        result = await cli.rewrite_directory(config)

    print(cli._format_summary(result, config))
    return result


__all__ = ["format_rewrite_summary", "run_rewrite"]
