"""
Single-pass skew estimate from Hough line segments.

Faster than the projection search but easily pulled off by pictures,
rulings and page borders. Results are snapped onto the same angle grid
as the search so both estimators share the output contract.
"""

import logging

import cv2
import numpy as np

from scandeskew.config import DeskewConfig
from scandeskew.constants import (
    CANNY_APERTURE,
    CANNY_HIGH,
    CANNY_LOW,
    HOUGH_MAX_LINE_GAP,
    HOUGH_MIN_LINE_LENGTH,
    HOUGH_RHO,
    HOUGH_THRESHOLD,
)
from scandeskew.services.skew.angle_search import candidate_angles
from scandeskew.services.skew.preprocess import to_grayscale

logger = logging.getLogger(__name__)


def fold_angle(angle: float) -> float:
    """Fold a line angle into [-45, 45) using its 90° ambiguity.

    A vertical stroke tilted by the same skew as a horizontal one folds
    onto the same value.
    """
    return ((angle + 45.0) % 90.0) - 45.0


def snap_angle(angle: float, config: DeskewConfig) -> float:
    """Return the search-grid candidate nearest to *angle* (clamped to the grid)."""
    grid = candidate_angles(config.min_angle, config.max_angle, config.step)
    index = int(round((angle - config.min_angle) / config.step))
    index = min(max(index, 0), len(grid) - 1)
    return grid[index]


def detect_line_angles(img: np.ndarray) -> list[float]:
    """Detect line segments and return their folded angles in degrees.

    Canny edges followed by the probabilistic Hough transform. Angles use
    image coordinates (y down), so a line that rises to the right is
    negative, which is also the rotation that levels it.
    """
    gray = to_grayscale(img)
    if gray.dtype == np.uint16:
        gray = (gray >> 8).astype(np.uint8)

    edges = cv2.Canny(gray, CANNY_LOW, CANNY_HIGH, apertureSize=CANNY_APERTURE)
    lines = cv2.HoughLinesP(
        edges,
        rho=HOUGH_RHO,
        theta=np.pi / 180,
        threshold=HOUGH_THRESHOLD,
        minLineLength=HOUGH_MIN_LINE_LENGTH,
        maxLineGap=HOUGH_MAX_LINE_GAP,
    )
    if lines is None:
        return []

    angles: list[float] = []
    # Segments come back as (N, 1, 4) or (N, 4) depending on the OpenCV release
    for x1, y1, x2, y2 in lines.reshape(-1, 4).astype(int).tolist():
        angles.append(fold_angle(float(np.degrees(np.arctan2(y2 - y1, x2 - x1)))))
    return angles


def estimate_angle_hough(preprocessed: np.ndarray, config: DeskewConfig | None = None) -> float:
    """Estimate the correction angle from the median Hough segment angle.

    Args:
        preprocessed: Page image, usually the output of ``preprocess``
        config: Supplies the angle grid the result is snapped to

    Returns:
        Correction angle in degrees on the search grid; 0.0 when no
        segments are found
    """
    config = config or DeskewConfig()
    angles = detect_line_angles(preprocessed)
    if not angles:
        logger.debug("Hough skew: no line segments detected")
        return snap_angle(0.0, config)

    median_angle = float(np.median(angles))
    snapped = snap_angle(median_angle, config)
    logger.debug(f"Hough skew: {median_angle:.2f}° -> {snapped:+.1f}° ({len(angles)} segments)")
    return snapped
