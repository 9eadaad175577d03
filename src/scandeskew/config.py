"""
ScanDeskew - Configuration Module

Application constants and the configuration dataclass for the deskew core.
"""

import math
from dataclasses import dataclass
from typing import Final

from scandeskew.constants import (
    DEFAULT_INK_THRESHOLD,
    DEFAULT_ROI_FRACTION,
    SEARCH_MAX_ANGLE,
    SEARCH_MIN_ANGLE,
    SEARCH_STEP,
)
from scandeskew.utils.exceptions import ConfigurationError

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "ScanDeskew"
APP_VERSION: Final[str] = "1.0.0"
CLI_PROG: Final[str] = "scandeskew-cli"

# ============================================================================
# Logging Configuration
# ============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: Final[str] = "%H:%M:%S"

# ============================================================================
# Strategy Names
# ============================================================================

METHOD_SEARCH: Final[str] = "search"
METHOD_HOUGH: Final[str] = "hough"
ANGLE_METHODS: Final[tuple[str, ...]] = (METHOD_SEARCH, METHOD_HOUGH)

PREPROCESS_SIMPLE: Final[str] = "simple"
PREPROCESS_ENHANCED: Final[str] = "enhanced"
PREPROCESSING_VARIANTS: Final[tuple[str, ...]] = (PREPROCESS_SIMPLE, PREPROCESS_ENHANCED)


@dataclass
class DeskewConfig:
    """Configuration for skew detection and correction.

    Attributes:
        method: Angle estimator ('search' for the row-projection scan,
            'hough' for the line-angle estimate)
        preprocessing: Preprocessing variant ('simple' grayscale + invert,
            'enhanced' filtered adaptive threshold)
        min_angle: First candidate angle in degrees
        max_angle: Last candidate angle in degrees (inclusive)
        step: Distance between candidate angles in degrees
        ink_threshold: Pixels strictly above this 8-bit level count as ink when scoring
        roi_fraction: Fraction of each dimension kept by the centred scoring crop
    """

    method: str = METHOD_SEARCH
    preprocessing: str = PREPROCESS_SIMPLE
    min_angle: float = SEARCH_MIN_ANGLE
    max_angle: float = SEARCH_MAX_ANGLE
    step: float = SEARCH_STEP
    ink_threshold: int = DEFAULT_INK_THRESHOLD
    roi_fraction: float = DEFAULT_ROI_FRACTION

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.method not in ANGLE_METHODS:
            raise ConfigurationError(
                "method", f"unknown method '{self.method}'. Valid: {', '.join(ANGLE_METHODS)}"
            )

        if self.preprocessing not in PREPROCESSING_VARIANTS:
            raise ConfigurationError(
                "preprocessing",
                f"unknown variant '{self.preprocessing}'. "
                f"Valid: {', '.join(PREPROCESSING_VARIANTS)}",
            )

        for name in ("min_angle", "max_angle", "step", "roi_fraction"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(name, "must be a finite number")

        # Equal bounds give a single-candidate grid
        if self.min_angle > self.max_angle:
            raise ConfigurationError(
                "min_angle", f"must not exceed max_angle, got {self.min_angle} > {self.max_angle}"
            )

        if self.step <= 0:
            raise ConfigurationError("step", f"must be > 0, got {self.step}")

        if not 0 < self.roi_fraction <= 1:
            raise ConfigurationError(
                "roi_fraction", f"must be in (0, 1], got {self.roi_fraction}"
            )

        if not 0 <= self.ink_threshold < 255:
            raise ConfigurationError(
                "ink_threshold", f"must be in [0, 255), got {self.ink_threshold}"
            )

    @property
    def candidate_count(self) -> int:
        """Number of candidate angles in the search grid."""
        from scandeskew.services.skew.angle_search import candidate_angles

        return len(candidate_angles(self.min_angle, self.max_angle, self.step))
