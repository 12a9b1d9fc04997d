"""Module entrypoint for ``python -m fuzzyfiler``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and runtime setup happen in ``fuzzyfiler.cli``.
"""

from .cli import run


if __name__ == "__main__":
    run()
