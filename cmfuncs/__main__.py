"""Allow ``python -m cmfuncs``."""

from cmfuncs.cli import main

if __name__ == "__main__":
    main()
