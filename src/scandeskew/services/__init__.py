"""
ScanDeskew - Services Package

Image buffer bridge, skew correction, background worker and session model.
"""

from scandeskew.services.deskew_worker import DeskewWorker
from scandeskew.services.scan_session import ScannedPage, ScanSession

__all__ = ["DeskewWorker", "ScanSession", "ScannedPage"]
