"""
Main entry point for terrain navigation.

Usage: python -m terrainnav.main [command] [options]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
