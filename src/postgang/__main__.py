"""Entry point for running postgang as a module.

Usage: python -m postgang --code 0357 file delivery_dates.json
"""

import sys

from postgang.cli import main

if __name__ == "__main__":
    sys.exit(main())
