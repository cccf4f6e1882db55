"""Module entrypoint for ``python -m gram``."""

from gram.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
