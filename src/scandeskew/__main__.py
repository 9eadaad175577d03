#!/usr/bin/env python3
"""
ScanDeskew - Entry point for python -m scandeskew

This module allows the package to be run as a module:
    python -m scandeskew
"""

import sys

from scandeskew import main

if __name__ == "__main__":
    sys.exit(main())
