"""Module entrypoint for ``python -m millercd``."""

from .cli import main


if __name__ == "__main__":
    main()
