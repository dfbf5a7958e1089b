"""Module entrypoint for ``python -m lazyjump``.

All argument parsing and session setup happen in ``lazyjump.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
