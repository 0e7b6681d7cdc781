"""Module entrypoint for ``python -m fishpager``.

This keeps module-mode execution behavior identical to the CLI script.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
