"""Allow ``python -m cleango``."""

from cleango.cli import main

if __name__ == "__main__":
    main()
