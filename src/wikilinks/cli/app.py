"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from wikilinks import ConfigError, WikiLinksError


def main(argv: list[str] | None = None) -> int:
    import wikilinks.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        cli.asyncio.run(cli._run_rewrite(args))
        return 0
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except WikiLinksError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
