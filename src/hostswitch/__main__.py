"""Allow running hostswitch with ``python -m hostswitch``."""

import sys

from hostswitch.cli import main


if __name__ == "__main__":
    sys.exit(main())
