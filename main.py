#!/usr/bin/env python3
"""
Run a page comparison from a checkout:
  python main.py <source> <current> [options]
"""

import sys

from pagediff.cli import main

if __name__ == "__main__":
    sys.exit(main())
