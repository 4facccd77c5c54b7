"""Module entrypoint for ``python -m headingnav``."""

from .cli import main


if __name__ == "__main__":
    main()
