"""End-to-end tests for deskew orchestration."""

import threading

import numpy as np
import pytest

from scandeskew.config import DeskewConfig
from scandeskew.services.skew import (
    deskew,
    deskew_with_details,
    detect_skew_angle,
    find_best_angle,
    preprocess,
    rotate_image,
)
from scandeskew.utils.exceptions import DeskewCancelledError, InvalidImageError

from synthetic import make_stripes, make_text_lines


class TestDeskew:
    """Tests for deskew with the default search."""

    def test_straightens_tilted_text(self, text_page):
        tilted = rotate_image(text_page, 8.0)
        corrected = deskew(tilted)
        residual = find_best_angle(preprocess(corrected))
        assert abs(residual) <= 1.0

    def test_full_width_lines_scenario(self):
        # 400x300, ten 2 px full-width lines at y = 15 + 30k, tilted by 8 degrees
        page = make_text_lines(h=300, w=400, count=10, first=15, spacing=30, thickness=2, margin=0)
        assert page[15, 0, 0] == 0 and page[16, 399, 0] == 0
        corrected = deskew(rotate_image(page, 8.0))
        assert corrected.shape == page.shape
        assert abs(find_best_angle(preprocess(corrected))) <= 1.0

    def test_reports_correction_angle(self, text_page):
        result = deskew_with_details(rotate_image(text_page, 8.0))
        assert abs(result.angle + 8.0) <= 0.5
        assert result.method == "search"
        assert result.score is not None

    def test_level_page_left_alone(self, text_page):
        assert abs(detect_skew_angle(text_page)) <= 0.5

    @pytest.mark.parametrize(
        "shape, dtype",
        [
            ((120, 160), np.uint8),
            ((120, 160, 1), np.uint8),
            ((120, 160, 3), np.uint8),
            ((120, 160, 4), np.uint8),
            ((120, 160, 3), np.uint16),
        ],
    )
    def test_preserves_shape_and_dtype(self, shape, dtype):
        img = np.full(shape, np.iinfo(dtype).max, dtype=dtype)
        img[50:54, 20:140] = 0
        config = DeskewConfig(min_angle=-5.0, max_angle=5.0, step=1.0)
        result = deskew(img, config)
        assert result.shape == shape
        assert result.dtype == dtype

    def test_input_not_modified(self, text_page):
        tilted = rotate_image(text_page, 4.0)
        before = tilted.copy()
        deskew(tilted)
        np.testing.assert_array_equal(tilted, before)

    def test_deterministic(self):
        tilted = rotate_image(make_stripes(), -6.0)
        first = deskew_with_details(tilted)
        second = deskew_with_details(tilted)
        assert first.angle == second.angle
        np.testing.assert_array_equal(first.image, second.image)

    def test_angle_matches_detection(self):
        tilted = rotate_image(make_text_lines(), -3.0)
        assert deskew_with_details(tilted).angle == detect_skew_angle(tilted)

    @pytest.mark.parametrize("bad", [None, np.zeros((0, 0, 3), dtype=np.uint8), [[1, 2]]])
    def test_rejects_invalid_input(self, bad):
        with pytest.raises(InvalidImageError):
            deskew(bad)

    def test_cancelled_search(self, text_page):
        event = threading.Event()
        event.set()
        with pytest.raises(DeskewCancelledError):
            deskew(text_page, cancel_event=event)


class TestDeskewHough:
    """Tests for deskew with the Hough estimator."""

    def test_hough_method(self):
        tilted = rotate_image(make_stripes(period=20), 5.0)
        result = deskew_with_details(tilted, DeskewConfig(method="hough"))
        assert result.method == "hough"
        assert result.score is None
        assert abs(result.angle + 5.0) <= 1.0
        assert result.image.shape == tilted.shape


class TestDeskewEnhanced:
    """Tests for deskew with enhanced preprocessing."""

    def test_enhanced_preprocessing_keeps_shape(self):
        img = np.full((120, 160, 3), 255, dtype=np.uint8)
        img[40:52, 20:140] = 0
        img[80:92, 20:140] = 0
        config = DeskewConfig(preprocessing="enhanced", min_angle=-5.0, max_angle=5.0)
        result = deskew_with_details(img, config)
        assert result.image.shape == img.shape
        assert -5.0 <= result.angle <= 5.0
