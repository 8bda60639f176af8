"""Module entrypoint for ``python -m chartviz``."""

from __future__ import annotations

from chartviz.gui.__main__ import main

if __name__ == "__main__":  # pragma: no cover
    main()
