"""
Rotation about the image centre.

All rotations keep the original dimensions: content rotated outside the
frame is cropped and uncovered corners are filled with black (zero).
"""

import math

import cv2
import numpy as np

from scandeskew.services.image_buffer import validate_image
from scandeskew.utils.exceptions import InvalidAngleError


def normalize_angle(angle: float) -> float:
    """Map an angle in degrees into the half-open interval (-180, 180].

    Raises:
        InvalidAngleError: If *angle* is NaN or infinite
    """
    angle = float(angle)
    if not math.isfinite(angle):
        raise InvalidAngleError(angle)

    angle = math.fmod(angle, 360.0)
    if angle > 180.0:
        angle -= 360.0
    elif angle <= -180.0:
        angle += 360.0
    return angle


def rotate_image(img: np.ndarray, angle: float) -> np.ndarray:
    """Rotate image by given angle, keeping original dimensions.

    Rotation is about the exact centre ``(w/2, h/2)`` with scale 1.0 and
    bilinear interpolation. Positive angles rotate counter-clockwise as
    displayed. Pixels that fall outside the source are filled with zero.

    Args:
        img: Input image (grayscale, BGR or BGRA; uint8 or uint16)
        angle: Rotation angle in degrees, any finite value

    Returns:
        Newly allocated rotated image with the input's shape and dtype

    Raises:
        InvalidImageError: If the buffer is empty or has an unsupported layout
        InvalidAngleError: If *angle* is not finite
    """
    h, w, _ = validate_image(img)
    angle = normalize_angle(angle)
    if angle == 0.0:
        return img.copy()

    center = (w / 2.0, h / 2.0)
    M = cv2.getRotationMatrix2D(center, angle, 1.0)
    rotated = cv2.warpAffine(
        img,
        M,
        (w, h),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )

    # warpAffine drops a trailing single-channel axis
    if rotated.ndim != img.ndim:
        rotated = rotated.reshape(img.shape)
    return rotated
