"""Module entrypoint for ``python -m sessionizer``."""

from sessionizer.cli import main

if __name__ == "__main__":
    main()
