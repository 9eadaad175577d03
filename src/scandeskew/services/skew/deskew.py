"""
Deskew orchestration.

preprocess → estimate angle → rotate the *original* image by that angle.
Every call is synchronous and stateless, so pages can be processed on any
thread and in parallel.
"""

import logging
import threading
from dataclasses import dataclass

import numpy as np

from scandeskew.config import METHOD_HOUGH, DeskewConfig
from scandeskew.services.image_buffer import validate_image
from scandeskew.services.skew.angle_search import search_best_angle
from scandeskew.services.skew.hough import estimate_angle_hough
from scandeskew.services.skew.preprocess import get_preprocessor
from scandeskew.services.skew.rotation import rotate_image

logger = logging.getLogger(__name__)


@dataclass
class DeskewResult:
    """Outcome of a deskew run.

    Attributes:
        image: Corrected image (same shape and dtype as the input)
        angle: Applied rotation in degrees
        score: Row-projection score at ``angle`` (None for the Hough method)
        method: Estimator that produced ``angle``
    """

    image: np.ndarray
    angle: float
    score: float | None
    method: str


def _estimate(
    img: np.ndarray,
    config: DeskewConfig,
    cancel_event: threading.Event | None,
) -> tuple[float, float | None]:
    validate_image(img)
    preprocessed = get_preprocessor(config.preprocessing)(img)

    if config.method == METHOD_HOUGH:
        return estimate_angle_hough(preprocessed, config), None
    return search_best_angle(preprocessed, config, cancel_event)


def detect_skew_angle(
    img: np.ndarray,
    config: DeskewConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> float:
    """Return the rotation in degrees that levels the text of *img*."""
    return _estimate(img, config or DeskewConfig(), cancel_event)[0]


def deskew_with_details(
    img: np.ndarray,
    config: DeskewConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> DeskewResult:
    """Deskew *img* and report the applied angle.

    The angle is measured on the preprocessed page but applied to the
    original image, so colour and channels are preserved. The input is
    never modified.

    Args:
        img: Captured page (grayscale, BGR or BGRA)
        config: Estimator and search settings
        cancel_event: Optional event that aborts the angle search

    Returns:
        DeskewResult with the corrected image

    Raises:
        InvalidImageError: For empty or unsupported buffers
        DeskewCancelledError: If *cancel_event* is set during the search
    """
    config = config or DeskewConfig()
    angle, score = _estimate(img, config, cancel_event)
    corrected = rotate_image(img, angle)

    logger.info(f"Deskew: correcting {angle:+.1f}° ({config.method}, {config.preprocessing})")
    return DeskewResult(image=corrected, angle=angle, score=score, method=config.method)


def deskew(
    img: np.ndarray,
    config: DeskewConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> np.ndarray:
    """Return a copy of *img* rotated so its text lines are horizontal."""
    return deskew_with_details(img, config, cancel_event).image
