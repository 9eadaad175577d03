"""
ScanDeskew - Numeric Constants

Simple numeric constants with ZERO internal imports to avoid circular dependencies.
For application-level constants (strings, logging), use config.py.
"""

from typing import Final

# ============================================================================
# Angle Search
# ============================================================================

SEARCH_MIN_ANGLE: Final[float] = -45.0
SEARCH_MAX_ANGLE: Final[float] = 45.0
SEARCH_STEP: Final[float] = 0.5

# ============================================================================
# Row-Projection Scoring
# ============================================================================

NORMALIZED_MAX: Final[float] = 255.0
BACKGROUND_LEVEL: Final[float] = 0.0
DEFAULT_INK_THRESHOLD: Final[int] = 140  # pixels above this count as ink
DEFAULT_ROI_FRACTION: Final[float] = 0.5  # centre crop, per dimension

# ============================================================================
# Hough Line Estimation
# ============================================================================

CANNY_LOW: Final[int] = 50
CANNY_HIGH: Final[int] = 150
CANNY_APERTURE: Final[int] = 3
HOUGH_RHO: Final[float] = 1.0
HOUGH_THRESHOLD: Final[int] = 50
HOUGH_MIN_LINE_LENGTH: Final[int] = 20
HOUGH_MAX_LINE_GAP: Final[int] = 40

# ============================================================================
# Enhanced Preprocessing
# ============================================================================

BLUR_KERNEL: Final[int] = 5
CLOSE_KERNEL: Final[int] = 5
BILATERAL_DIAMETER: Final[int] = 9
BILATERAL_SIGMA: Final[float] = 75.0
MEDIAN_KERNEL: Final[int] = 5
ADAPTIVE_BLOCK_SIZE: Final[int] = 11
ADAPTIVE_C: Final[float] = 2.0

# ============================================================================
# Background Worker
# ============================================================================

DEFAULT_WORKERS: Final[int] = 2
