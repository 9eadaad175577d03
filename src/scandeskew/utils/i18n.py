"""
ScanDeskew - Internationalization Module

This module initializes gettext for the command line help strings.
"""

import gettext
import os
import sys
from collections.abc import Callable


def _dummy_translate(text: str) -> str:
    """Fallback translation function that returns the original text.

    Args:
        text: The text to translate.

    Returns:
        The original text unchanged.
    """
    return text


# Initialize _ with the fallback function
_: Callable[[str], str] = _dummy_translate

# Configure gettext
try:
    locale_dirs = [
        "/usr/share/locale",
        os.path.join(sys.prefix, "share", "locale"),
        os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "locale"),
    ]

    for locale_dir in locale_dirs:
        if os.path.exists(locale_dir):
            gettext.bindtextdomain("scandeskew", locale_dir)

    gettext.textdomain("scandeskew")
    _ = gettext.gettext

except OSError:
    # Keep using the dummy function if the catalogs are unreadable
    pass
