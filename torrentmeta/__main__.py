"""Allow ``python -m torrentmeta``."""

from __future__ import annotations

from torrentmeta.cli.main import main

if __name__ == "__main__":
    main()
