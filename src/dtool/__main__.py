"""Allow running dtool as ``python -m dtool``."""

from dtool.cli import main

if __name__ == "__main__":
    main()
