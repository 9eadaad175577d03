"""Tests for DeskewConfig validation."""

import math

import pytest

from scandeskew.config import ANGLE_METHODS, PREPROCESSING_VARIANTS, DeskewConfig
from scandeskew.utils.exceptions import ConfigurationError


class TestDeskewConfigDefaults:
    """Tests for DeskewConfig defaults."""

    def test_default_values(self):
        config = DeskewConfig()
        assert config.method == "search"
        assert config.preprocessing == "simple"
        assert config.min_angle == -45.0
        assert config.max_angle == 45.0
        assert config.step == 0.5
        assert config.ink_threshold == 140
        assert config.roi_fraction == 0.5

    def test_candidate_count(self):
        assert DeskewConfig().candidate_count == 181
        assert DeskewConfig(min_angle=-1, max_angle=1, step=1).candidate_count == 3

    def test_known_names(self):
        assert "hough" in ANGLE_METHODS
        assert "enhanced" in PREPROCESSING_VARIANTS


class TestDeskewConfigValidation:
    """Tests for DeskewConfig validation."""

    def test_unknown_method(self):
        with pytest.raises(ConfigurationError, match="method"):
            DeskewConfig(method="fourier")

    def test_unknown_preprocessing(self):
        with pytest.raises(ConfigurationError, match="preprocessing"):
            DeskewConfig(preprocessing="sharpen")

    def test_reversed_range_rejected(self):
        with pytest.raises(ConfigurationError, match="min_angle"):
            DeskewConfig(min_angle=10.0, max_angle=-10.0)

    def test_equal_bounds_single_candidate(self):
        config = DeskewConfig(min_angle=3.0, max_angle=3.0)
        assert config.candidate_count == 1

    @pytest.mark.parametrize("step", [0.0, -0.5])
    def test_step_must_be_positive(self, step):
        with pytest.raises(ConfigurationError, match="step"):
            DeskewConfig(step=step)

    @pytest.mark.parametrize("fraction", [0.0, -0.1, 1.5])
    def test_roi_fraction_range(self, fraction):
        with pytest.raises(ConfigurationError, match="roi_fraction"):
            DeskewConfig(roi_fraction=fraction)

    def test_full_roi_allowed(self):
        assert DeskewConfig(roi_fraction=1.0).roi_fraction == 1.0

    @pytest.mark.parametrize("threshold", [-1, 255, 1000])
    def test_ink_threshold_range(self, threshold):
        with pytest.raises(ConfigurationError, match="ink_threshold"):
            DeskewConfig(ink_threshold=threshold)

    @pytest.mark.parametrize("field", ["min_angle", "max_angle", "step", "roi_fraction"])
    def test_non_finite_rejected(self, field):
        with pytest.raises(ConfigurationError, match="finite"):
            DeskewConfig(**{field: math.nan})
