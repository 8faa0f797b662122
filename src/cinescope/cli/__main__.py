"""Allow running the CLI with ``python -m cinescope.cli``."""

from .main import main

if __name__ == "__main__":
    main()
