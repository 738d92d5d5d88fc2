"""
__main__.py -- Entry point for `python -m csv_localize`.

Usage: python -m csv_localize serve
"""

import sys

from csv_localize.main import main


if __name__ == "__main__":
    sys.exit(main())
