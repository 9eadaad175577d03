"""
Preprocessing for skew detection.

Turns a captured page into a single-channel image where ink is the bright
foreground signal, ready for row-projection scoring or line detection.

Two variants:

- ``preprocess``: grayscale conversion followed by polarity inversion.
- ``preprocess_enhanced``: blur, shadow-reducing morphology, contrast
  normalization, edge-preserving denoise and an inverted adaptive
  threshold, for noisy photographs.
"""

from collections.abc import Callable

import cv2
import numpy as np

from scandeskew.config import PREPROCESS_ENHANCED, PREPROCESS_SIMPLE, PREPROCESSING_VARIANTS
from scandeskew.constants import (
    ADAPTIVE_BLOCK_SIZE,
    ADAPTIVE_C,
    BILATERAL_DIAMETER,
    BILATERAL_SIGMA,
    BLUR_KERNEL,
    CLOSE_KERNEL,
    MEDIAN_KERNEL,
)
from scandeskew.services.image_buffer import validate_image
from scandeskew.utils.exceptions import ConfigurationError


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert a 1, 3 (BGR) or 4 (BGRA) channel image to a 2-D grayscale copy."""
    _, _, channels = validate_image(img)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    if img.ndim == 3:
        return img[:, :, 0].copy()
    return img.copy()


def preprocess(img: np.ndarray) -> np.ndarray:
    """Grayscale + invert so dark ink becomes high-valued foreground.

    Each sample becomes ``max_value - value`` where ``max_value`` is 255
    for 8-bit and 65535 for 16-bit buffers.

    Args:
        img: Input image (grayscale, BGR or BGRA)

    Returns:
        Single-channel image with the input's width, height and dtype

    Raises:
        InvalidImageError: If the buffer is empty or has an unsupported layout
    """
    gray = to_grayscale(img)
    return cv2.bitwise_not(gray)


def preprocess_enhanced(img: np.ndarray) -> np.ndarray:
    """Filtered binarization for photographs with noise and shadows.

    Grayscale → Gaussian blur → morphological close → min-max normalize →
    bilateral filter → median blur → inverted adaptive Gaussian threshold.
    Thin strokes narrower than the closing kernel are weakened by the close
    step, so this variant suits body text photographed at normal resolution.

    Returns:
        Binary uint8 image (ink 255, paper 0) with the input's width and height
    """
    gray = to_grayscale(img)
    if gray.dtype == np.uint16:
        gray = (gray >> 8).astype(np.uint8)

    blurred = cv2.GaussianBlur(gray, (BLUR_KERNEL, BLUR_KERNEL), 0)

    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (CLOSE_KERNEL, CLOSE_KERNEL))
    closed = cv2.morphologyEx(blurred, cv2.MORPH_CLOSE, kernel)

    normalized = cv2.normalize(closed, None, 0, 255, cv2.NORM_MINMAX)
    filtered = cv2.bilateralFilter(normalized, BILATERAL_DIAMETER, BILATERAL_SIGMA, BILATERAL_SIGMA)
    filtered = cv2.medianBlur(filtered, MEDIAN_KERNEL)

    return cv2.adaptiveThreshold(
        filtered,
        255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY_INV,
        ADAPTIVE_BLOCK_SIZE,
        ADAPTIVE_C,
    )


_PREPROCESSORS: dict[str, Callable[[np.ndarray], np.ndarray]] = {
    PREPROCESS_SIMPLE: preprocess,
    PREPROCESS_ENHANCED: preprocess_enhanced,
}


def get_preprocessor(name: str) -> Callable[[np.ndarray], np.ndarray]:
    """Look up a preprocessing variant by name ('simple' or 'enhanced')."""
    try:
        return _PREPROCESSORS[name]
    except KeyError:
        raise ConfigurationError(
            "preprocessing",
            f"unknown variant '{name}'. Valid: {', '.join(PREPROCESSING_VARIANTS)}",
        ) from None
