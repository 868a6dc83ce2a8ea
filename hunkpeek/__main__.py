"""Module entrypoint for ``python -m hunkpeek``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and pipeline setup happen in ``hunkpeek.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
