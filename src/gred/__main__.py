"""
CLI entry point for gred.

This allows the tool to be run as:
    python -m gred [-p] [patterns ...]
"""

import sys

from gred.gred_command import main


if __name__ == "__main__":
    sys.exit(main())
