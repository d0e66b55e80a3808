"""Allow running QuickWrap as ``python -m quickwrap``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
