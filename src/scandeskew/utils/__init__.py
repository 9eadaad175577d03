"""
ScanDeskew - Utilities Package

Exception types and gettext helpers shared by the library and CLI.
"""
