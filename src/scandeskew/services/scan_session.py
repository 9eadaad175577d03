"""
ScanDeskew - Scan Session Model

Pages captured in one scanning session, owned and passed around by the
caller instead of living in process-wide state.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import cv2
import numpy as np

from scandeskew.services.image_buffer import validate_image
from scandeskew.services.skew.deskew import DeskewResult

if TYPE_CHECKING:
    from scandeskew.services.deskew_worker import DeskewWorker

_QUARTER_TURNS = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


@dataclass
class ScannedPage:
    """A captured page and its corrections.

    Attributes:
        original: Image as captured (after cropping)
        corrected: Deskewed image, None until deskew has run
        angle: Applied deskew angle in degrees, None until deskew has run
        rotation: Extra clockwise quarter turn chosen by the user (0, 90, 180, 270)
    """

    original: np.ndarray
    corrected: np.ndarray | None = None
    angle: float | None = None
    rotation: int = 0

    def __post_init__(self) -> None:
        """Validate the image and normalize rotation."""
        validate_image(self.original)
        self.rotation = self.rotation % 360
        if self.rotation not in (0, 90, 180, 270):
            # Round to nearest valid rotation
            self.rotation = round(self.rotation / 90) * 90 % 360

    @property
    def is_deskewed(self) -> bool:
        return self.corrected is not None

    @property
    def image(self) -> np.ndarray:
        """Corrected image when available, otherwise the original."""
        return self.corrected if self.corrected is not None else self.original

    def oriented_image(self) -> np.ndarray:
        """``image`` with the user's quarter turn applied."""
        if self.rotation == 0:
            return self.image.copy()
        return cv2.rotate(self.image, _QUARTER_TURNS[self.rotation])

    def rotate_left(self) -> None:
        """Rotate page 90 degrees counter-clockwise."""
        self.rotation = (self.rotation - 90) % 360

    def rotate_right(self) -> None:
        """Rotate page 90 degrees clockwise."""
        self.rotation = (self.rotation + 90) % 360

    def apply_deskew(self, result: DeskewResult) -> None:
        self.corrected = result.image
        self.angle = result.angle


@dataclass
class ScanSession:
    """Ordered pages of one scanning session plus the selected page.

    Attributes:
        pages: Pages in document order
        current_index: Index of the selected page (0 when empty)
    """

    pages: list[ScannedPage] = field(default_factory=list)
    current_index: int = 0

    def __len__(self) -> int:
        return len(self.pages)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.pages):
            raise IndexError(
                f"Page index {index} out of range (session has {len(self.pages)} pages)"
            )

    @property
    def current_page(self) -> ScannedPage | None:
        if not self.pages:
            return None
        return self.pages[self.current_index]

    def add_page(self, image: np.ndarray) -> ScannedPage:
        """Append a captured image and select it."""
        page = ScannedPage(original=image)
        self.pages.append(page)
        self.current_index = len(self.pages) - 1
        return page

    def remove_page(self, index: int) -> ScannedPage:
        """Remove and return the page at *index*, keeping a valid selection."""
        self._check_index(index)
        page = self.pages.pop(index)
        if index < self.current_index:
            self.current_index -= 1
        self.current_index = min(self.current_index, max(len(self.pages) - 1, 0))
        return page

    def move_page(self, source: int, destination: int) -> None:
        """Move a page to a new position; the selection follows the selected page."""
        self._check_index(source)
        self._check_index(destination)
        selected = self.current_page
        page = self.pages.pop(source)
        self.pages.insert(destination, page)
        self.current_index = next(i for i, p in enumerate(self.pages) if p is selected)

    def select(self, index: int) -> ScannedPage:
        self._check_index(index)
        self.current_index = index
        return self.pages[index]

    def pending_indices(self) -> list[int]:
        """Indices of pages that have not been deskewed yet."""
        return [i for i, page in enumerate(self.pages) if not page.is_deskewed]

    def apply_deskew(self, index: int, result: DeskewResult) -> None:
        self._check_index(index)
        self.pages[index].apply_deskew(result)

    def deskew_all(self, worker: "DeskewWorker") -> list[DeskewResult]:
        """Deskew every page through *worker* and store the results.

        Returns:
            Results in page order
        """
        results = worker.deskew_many(page.original for page in self.pages)
        for page, result in zip(self.pages, results):
            page.apply_deskew(result)
        return results
