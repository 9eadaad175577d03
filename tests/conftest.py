"""Pytest configuration for scandeskew tests."""

import numpy as np
import pytest

from synthetic import make_stripes, make_text_lines


@pytest.fixture
def stripes():
    return make_stripes()


@pytest.fixture
def text_page():
    return make_text_lines()


@pytest.fixture
def blank_gray():
    return np.zeros((100, 120), dtype=np.uint8)
