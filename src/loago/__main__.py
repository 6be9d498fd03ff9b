"""Entry point for ``python -m loago``."""

import sys

from loago.cli.app import main

if __name__ == "__main__":
    sys.exit(main())
