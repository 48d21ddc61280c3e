"""
DECIDE CLI entry point.

Usage:
    python -m decide.cli run <path> [--output DIR]
    python -m decide.cli explain <file>
    python -m decide.cli summary <dir>
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
