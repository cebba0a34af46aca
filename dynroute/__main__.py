"""Allow ``python -m dynroute``."""

from dynroute.cli import main

if __name__ == "__main__":
    main()
