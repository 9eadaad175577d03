"""
Image buffer helpers.

The deskew core works on plain ``numpy`` arrays laid out the way OpenCV
expects them: ``(H, W)`` or ``(H, W, C)`` with BGR/BGRA channel order.
This module validates those buffers and bridges them to Pillow images,
encoded bytes and files.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np
from PIL import Image, ImageOps

from scandeskew.utils.exceptions import ImageIOError, InvalidImageError

logger = logging.getLogger(__name__)

SUPPORTED_DTYPES = (np.dtype(np.uint8), np.dtype(np.uint16))
SUPPORTED_CHANNELS = (1, 3, 4)


@dataclass(frozen=True)
class ImageInfo:
    """Geometry and sample layout of an image buffer.

    Attributes:
        width: Number of columns
        height: Number of rows
        channels: 1 (grayscale), 3 (BGR) or 4 (BGRA)
        dtype: Sample type name ('uint8' or 'uint16')
    """

    width: int
    height: int
    channels: int
    dtype: str

    @property
    def max_value(self) -> int:
        """Largest representable sample value."""
        return int(np.iinfo(self.dtype).max)


def validate_image(image) -> tuple[int, int, int]:
    """Check that *image* is a usable buffer.

    Args:
        image: Candidate image buffer

    Returns:
        (height, width, channels)

    Raises:
        InvalidImageError: For non-arrays, unsupported dtypes or channel
            counts, and zero width or height.
    """
    if image is None:
        raise InvalidImageError("image is None")
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"expected numpy.ndarray, got {type(image).__name__}")

    shape = image.shape
    if image.ndim == 2:
        channels = 1
    elif image.ndim == 3:
        channels = shape[2]
    else:
        raise InvalidImageError(f"expected 2 or 3 dimensions, got {image.ndim}", shape)

    if channels not in SUPPORTED_CHANNELS:
        raise InvalidImageError(f"unsupported channel count {channels}", shape)

    h, w = shape[:2]
    if h == 0 or w == 0:
        raise InvalidImageError("image has zero width or height", shape)

    if image.dtype not in SUPPORTED_DTYPES:
        raise InvalidImageError(f"unsupported sample type {image.dtype}", shape)

    return h, w, channels


def channel_count(image: np.ndarray) -> int:
    """Return the channel count of a valid image."""
    return validate_image(image)[2]


def describe_image(image: np.ndarray) -> ImageInfo:
    """Return width, height, channel count and dtype of *image*."""
    h, w, channels = validate_image(image)
    return ImageInfo(width=w, height=h, channels=channels, dtype=image.dtype.name)


# ── Pillow bridge ────────────────────────────────────────────────


def from_pil(pil_img: Image.Image, apply_exif: bool = True) -> np.ndarray:
    """Convert a Pillow image to an OpenCV-layout buffer.

    Args:
        pil_img: Source image
        apply_exif: Rotate pixels to match the EXIF orientation tag first

    Returns:
        Grayscale, BGR or BGRA array
    """
    if apply_exif:
        pil_img = ImageOps.exif_transpose(pil_img)

    mode = pil_img.mode
    if mode.startswith("I;16"):
        return np.array(pil_img, dtype=np.uint16)
    if mode == "I":
        # 32-bit integer mode, used by some decoders for 16-bit grayscale
        return np.clip(np.array(pil_img), 0, 65535).astype(np.uint16)
    if mode in ("1", "L"):
        return np.array(pil_img.convert("L"), dtype=np.uint8)

    has_alpha = mode in ("RGBA", "LA", "PA") or "transparency" in pil_img.info
    if has_alpha:
        rgba = np.array(pil_img.convert("RGBA"), dtype=np.uint8)
        return cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)

    rgb = np.array(pil_img.convert("RGB"), dtype=np.uint8)
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def to_pil(image: np.ndarray) -> Image.Image:
    """Convert an OpenCV-layout buffer to a Pillow image.

    16-bit colour buffers are reduced to 8 bits since Pillow has no
    16-bit RGB mode.
    """
    _, _, channels = validate_image(image)
    if image.ndim == 3 and channels == 1:
        image = image[:, :, 0]

    if channels == 1:
        # uint8 maps to mode 'L', uint16 to 'I;16'
        return Image.fromarray(np.ascontiguousarray(image))

    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    if channels == 3:
        return Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))
    return Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA))


# ── Bytes and files ──────────────────────────────────────────────


def decode_image(data: bytes) -> np.ndarray:
    """Decode an encoded image (PNG, JPEG, TIFF, ...) held in memory."""
    if not data:
        raise ImageIOError("<bytes>", "no data")
    buf = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageIOError("<bytes>", "data is not a decodable image")
    validate_image(image)
    return image


def encode_image(image: np.ndarray, ext: str = ".png") -> bytes:
    """Encode *image* to bytes in the format implied by *ext*."""
    validate_image(image)
    if not ext.startswith("."):
        ext = f".{ext}"
    ok, buffer = cv2.imencode(ext, image)
    if not ok:
        raise ImageIOError(f"<{ext}>", "encoder rejected the image")
    return buffer.tobytes()


def load_image(path: str | Path) -> np.ndarray:
    """Load an image file, applying its EXIF orientation.

    Args:
        path: Image file path

    Returns:
        Grayscale, BGR or BGRA array

    Raises:
        ImageIOError: If the file is missing or cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise ImageIOError(str(path), "file not found")

    try:
        with Image.open(path) as pil_img:
            image = from_pil(pil_img)
    except (OSError, ValueError) as e:
        logger.debug(f"Pillow could not read {path}: {e}; trying OpenCV")
        image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise ImageIOError(str(path), "unsupported or corrupt image") from e

    validate_image(image)
    logger.debug(f"Loaded {path.name}: {image.shape[1]}x{image.shape[0]} {image.dtype}")
    return image


def save_image(image: np.ndarray, path: str | Path) -> Path:
    """Write *image* to *path*, creating parent directories.

    Returns:
        The written path
    """
    validate_image(image)
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ImageIOError(str(path), f"cannot create directory: {e}") from e

    try:
        written = cv2.imwrite(str(path), image)
    except cv2.error as e:
        raise ImageIOError(str(path), str(e)) from e
    if not written:
        raise ImageIOError(str(path), "encoder rejected the image or extension")

    logger.debug(f"Saved {path}")
    return path
