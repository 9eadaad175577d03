"""Tests for rotation about the image centre."""

import math

import numpy as np
import pytest

from scandeskew.services.skew.rotation import normalize_angle, rotate_image
from scandeskew.utils.exceptions import InvalidAngleError, InvalidImageError


def _make_bgr(h=100, w=100, value=128):
    """Create a solid-color BGR image."""
    return np.full((h, w, 3), value, dtype=np.uint8)


class TestNormalizeAngle:
    """Tests for normalize_angle."""

    def test_in_range_unchanged(self):
        assert normalize_angle(12.5) == 12.5
        assert normalize_angle(-45.0) == -45.0

    def test_wraps_above_180(self):
        assert normalize_angle(270.0) == -90.0

    def test_wraps_full_turns(self):
        assert normalize_angle(725.0) == pytest.approx(5.0)
        assert normalize_angle(-365.0) == pytest.approx(-5.0)

    def test_half_open_interval(self):
        assert normalize_angle(180.0) == 180.0
        assert normalize_angle(-180.0) == 180.0

    @pytest.mark.parametrize("angle", [math.nan, math.inf, -math.inf])
    def test_non_finite_raises(self, angle):
        with pytest.raises(InvalidAngleError):
            normalize_angle(angle)


class TestRotateImage:
    """Tests for rotate_image."""

    def test_zero_angle_preserves(self):
        img = _make_bgr()
        result = rotate_image(img, 0)
        np.testing.assert_array_equal(result, img)

    def test_zero_angle_returns_copy(self):
        img = _make_bgr()
        result = rotate_image(img, 0)
        result[0, 0] = 0
        assert img[0, 0, 0] == 128

    def test_full_turn_is_identity(self):
        img = _make_bgr()
        np.testing.assert_array_equal(rotate_image(img, 360), img)

    def test_preserves_dimensions(self):
        img = _make_bgr(h=200, w=300)
        result = rotate_image(img, 15)
        assert result.shape == img.shape
        assert result.dtype == img.dtype

    @pytest.mark.parametrize(
        "shape",
        [(80, 60), (80, 60, 1), (80, 60, 3), (80, 60, 4)],
    )
    def test_preserves_layout(self, shape):
        img = np.full(shape, 200, dtype=np.uint8)
        result = rotate_image(img, -7.5)
        assert result.shape == shape

    def test_uint16_preserved(self):
        img = np.full((50, 70), 40000, dtype=np.uint16)
        result = rotate_image(img, 3)
        assert result.dtype == np.uint16
        assert abs(int(result[25, 35]) - 40000) <= 1

    def test_corners_filled_with_black(self):
        img = _make_bgr(h=100, w=100, value=255)
        result = rotate_image(img, 45)
        np.testing.assert_array_equal(result[0, 0], [0, 0, 0])
        np.testing.assert_array_equal(result[50, 50], [255, 255, 255])

    def test_input_not_modified(self):
        img = _make_bgr(value=255)
        before = img.copy()
        rotate_image(img, 30)
        np.testing.assert_array_equal(img, before)

    def test_positive_angle_is_counter_clockwise(self):
        # A dot right of centre moves up (to smaller rows) for +90
        img = np.zeros((101, 101), dtype=np.uint8)
        img[50, 90] = 255
        result = rotate_image(img, 90)
        y, x = np.unravel_index(np.argmax(result), result.shape)
        assert y < 50
        assert abs(x - 50) <= 1

    def test_empty_image_raises(self):
        with pytest.raises(InvalidImageError):
            rotate_image(np.zeros((0, 10), dtype=np.uint8), 5)

    def test_non_finite_angle_raises(self):
        with pytest.raises(InvalidAngleError):
            rotate_image(_make_bgr(), math.nan)
