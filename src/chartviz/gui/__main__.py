"""Module entrypoint for ``python -m chartviz.gui``."""

from __future__ import annotations

import sys

from . import launcher as _launcher


def main():  # pragma: no cover - runtime delegation
    sys.exit(_launcher.main())


if __name__ == "__main__":  # pragma: no cover
    main()
