"""Module entrypoint for ``python -m cliui``."""

from .cli import main


if __name__ == "__main__":
    main()
