"""
ScanDeskew - Skew correction for scanned document pages

Estimates the rotation that levels the text lines of a captured page and
applies it, either synchronously or through a background worker.
"""

__version__ = "1.0.0"
__author__ = "ScanDeskew Team"
__license__ = "GPL-3.0"

from scandeskew.cli import main
from scandeskew.config import DeskewConfig
from scandeskew.services.skew import deskew, deskew_with_details, detect_skew_angle

__all__ = [
    "DeskewConfig",
    "__author__",
    "__license__",
    "__version__",
    "deskew",
    "deskew_with_details",
    "detect_skew_angle",
    "main",
]
