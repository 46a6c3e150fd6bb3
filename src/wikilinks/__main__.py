"""Allow ``python -m wikilinks``."""

from __future__ import annotations

import sys

from wikilinks.cli import main

if __name__ == "__main__":
    sys.exit(main())
