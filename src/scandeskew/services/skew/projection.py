"""
Row-projection ("zebra stripe") scoring.

Summing a preprocessed page along its rows gives a projection profile.
When text lines are horizontal the ink is packed into a few bands of rows
separated by empty rows; when the page is tilted every line smears across
many rows. The score counts the rows that carry any ink, so lower is
better.
"""

from collections.abc import Sequence

import numpy as np

from scandeskew.constants import (
    BACKGROUND_LEVEL,
    DEFAULT_INK_THRESHOLD,
    DEFAULT_ROI_FRACTION,
    NORMALIZED_MAX,
)
from scandeskew.services.image_buffer import validate_image
from scandeskew.utils.exceptions import DegenerateInputError, InvalidImageError


def single_channel_plane(img: np.ndarray) -> np.ndarray:
    """Return the 2-D plane of a single-channel image (``(h, w)`` or ``(h, w, 1)``)."""
    _, _, channels = validate_image(img)
    if channels != 1:
        raise InvalidImageError(
            f"expected a single-channel image, got {channels} channels", img.shape
        )
    return img if img.ndim == 2 else img[:, :, 0]


def row_sums(img: np.ndarray) -> np.ndarray:
    """Sum pixel values along each row.

    Args:
        img: Single-channel image

    Returns:
        float64 vector of length ``h``; entry ``i`` is the sum of row ``i``
    """
    plane = single_channel_plane(img)
    # Integer accumulation is exact, so the result does not depend on summation order
    return plane.sum(axis=1, dtype=np.int64).astype(np.float64)


def central_roi(img: np.ndarray, fraction: float = DEFAULT_ROI_FRACTION) -> np.ndarray:
    """Centred crop keeping *fraction* of each dimension (at least 1x1).

    The crop is a view into *img*; ``fraction == 1.0`` returns the whole image.
    """
    h, w, _ = validate_image(img)
    if fraction >= 1.0:
        return img

    roi_h = max(1, int(round(h * fraction)))
    roi_w = max(1, int(round(w * fraction)))
    y0 = (h - roi_h) // 2
    x0 = (w - roi_w) // 2
    return img[y0 : y0 + roi_h, x0 : x0 + roi_w]


def normalize_rows(rows: Sequence[float]) -> np.ndarray:
    """Scale row sums to [0, 255] by dividing by the largest entry.

    A sequence whose maximum is 0 normalizes to all zeros.

    Raises:
        DegenerateInputError: If *rows* is empty
    """
    values = np.asarray(rows, dtype=np.float64).ravel()
    if values.size == 0:
        raise DegenerateInputError()

    peak = float(values.max())
    if peak <= 0.0:
        return np.zeros_like(values)
    return values * (NORMALIZED_MAX / peak)


def score_rows(rows: Sequence[float]) -> float:
    """Count rows that are not pure background.

    Args:
        rows: Per-row intensity sums, in row order

    Returns:
        Number of rows whose normalized value is above the background
        level, as a float. Lower means ink is concentrated in fewer rows.

    Raises:
        DegenerateInputError: If *rows* is empty
    """
    normalized = normalize_rows(rows)
    return float(np.count_nonzero(normalized > BACKGROUND_LEVEL))


def binarize_ink(img: np.ndarray, ink_threshold: int = DEFAULT_INK_THRESHOLD) -> np.ndarray:
    """Map pixels strictly above *ink_threshold* to 255 and everything else to 0.

    The threshold is given on the 8-bit scale and stretched for 16-bit input.
    """
    plane = single_channel_plane(img)
    level = ink_threshold * 257 if plane.dtype == np.uint16 else ink_threshold
    return np.where(plane > level, 255, 0).astype(np.uint8)


def score_image(
    img: np.ndarray,
    ink_threshold: int = DEFAULT_INK_THRESHOLD,
    roi_fraction: float = DEFAULT_ROI_FRACTION,
) -> float:
    """Score a (rotated) preprocessed image.

    Crops the centre region, keeps pixels above the ink threshold and
    scores the resulting row sums with ``score_rows``.
    """
    roi = central_roi(single_channel_plane(img), roi_fraction)
    return score_rows(row_sums(binarize_ink(roi, ink_threshold)))
