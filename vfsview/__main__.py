"""Module entrypoint for ``python -m vfsview``."""

from .cli import main


if __name__ == "__main__":
    main()
