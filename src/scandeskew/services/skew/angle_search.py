"""
Best-rotation search.

Evaluates the row-projection score at every candidate angle of a fixed
grid and keeps the lowest. The scan always covers the whole grid; ties
go to the first (most negative) candidate.
"""

import logging
import math
import threading
from collections.abc import Iterator

import numpy as np

from scandeskew.config import DeskewConfig
from scandeskew.constants import SEARCH_MAX_ANGLE, SEARCH_MIN_ANGLE, SEARCH_STEP
from scandeskew.services.skew.projection import single_channel_plane, score_image
from scandeskew.services.skew.rotation import rotate_image
from scandeskew.utils.exceptions import ConfigurationError, DeskewCancelledError

logger = logging.getLogger(__name__)


def candidate_angles(
    min_angle: float = SEARCH_MIN_ANGLE,
    max_angle: float = SEARCH_MAX_ANGLE,
    step: float = SEARCH_STEP,
) -> list[float]:
    """Closed grid ``min_angle, min_angle + step, ..., <= max_angle`` in increasing order.

    Each value is computed as ``min_angle + i * step`` so rounding errors
    do not accumulate. The defaults give the 181 angles -45.0 .. 45.0.
    """
    if step <= 0:
        raise ConfigurationError("step", f"must be > 0, got {step}")
    if min_angle > max_angle:
        raise ConfigurationError("min_angle", f"must not exceed max_angle ({max_angle})")

    # Epsilon keeps the endpoint when the range is an exact multiple of step
    count = int(math.floor((max_angle - min_angle) / step + 1e-9)) + 1
    return [min_angle + i * step for i in range(count)]


def _iter_scores(
    preprocessed: np.ndarray,
    config: DeskewConfig,
    cancel_event: threading.Event | None,
) -> Iterator[tuple[float, float]]:
    single_channel_plane(preprocessed)
    angles = candidate_angles(config.min_angle, config.max_angle, config.step)
    for i, angle in enumerate(angles):
        if cancel_event is not None and cancel_event.is_set():
            raise DeskewCancelledError(i, len(angles))
        rotated = rotate_image(preprocessed, angle)
        yield angle, score_image(rotated, config.ink_threshold, config.roi_fraction)


def score_candidates(
    preprocessed: np.ndarray,
    config: DeskewConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> list[tuple[float, float]]:
    """Return ``(angle, score)`` for every candidate, in search order."""
    return list(_iter_scores(preprocessed, config or DeskewConfig(), cancel_event))


def search_best_angle(
    preprocessed: np.ndarray,
    config: DeskewConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> tuple[float, float]:
    """Find the candidate rotation with the lowest score.

    Args:
        preprocessed: Single-channel image with bright ink (see ``preprocess``)
        config: Search grid, ink threshold and ROI settings
        cancel_event: Optional event checked before each candidate

    Returns:
        (best_angle, best_score)

    Raises:
        InvalidImageError: If the image is empty or not single-channel
        DeskewCancelledError: If *cancel_event* is set during the scan
    """
    best_score = math.inf
    best_angle = 0.0
    evaluated = 0

    for angle, score in _iter_scores(preprocessed, config or DeskewConfig(), cancel_event):
        evaluated += 1
        if score < best_score:
            best_score = score
            best_angle = angle

    logger.debug(
        f"Best rotation {best_angle:+.1f}° (score {best_score:.0f}, {evaluated} candidates)"
    )
    return best_angle, best_score


def find_best_angle(
    preprocessed: np.ndarray,
    config: DeskewConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> float:
    """Return the correction angle in degrees for a preprocessed page."""
    return search_best_angle(preprocessed, config, cancel_event)[0]
