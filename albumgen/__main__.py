"""
Main entry point for running the package as a module.

Usage:
    python -m albumgen --root ~/Pictures
    python -m albumgen --root ~/Pictures --test --no-serve
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
