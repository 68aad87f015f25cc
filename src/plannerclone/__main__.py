"""Module entrypoint for ``python -m plannerclone``."""

from plannerclone.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
