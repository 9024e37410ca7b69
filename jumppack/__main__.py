"""Module entrypoint for ``python -m jumppack``.

All argument parsing and session setup happen in ``jumppack.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
