"""
Skew detection and correction for captured document pages.
"""

from scandeskew.services.skew.angle_search import (
    candidate_angles,
    find_best_angle,
    score_candidates,
    search_best_angle,
)
from scandeskew.services.skew.deskew import (
    DeskewResult,
    deskew,
    deskew_with_details,
    detect_skew_angle,
)
from scandeskew.services.skew.hough import estimate_angle_hough
from scandeskew.services.skew.preprocess import get_preprocessor, preprocess, preprocess_enhanced
from scandeskew.services.skew.projection import row_sums, score_image, score_rows
from scandeskew.services.skew.rotation import normalize_angle, rotate_image

__all__ = [
    "DeskewResult",
    "candidate_angles",
    "deskew",
    "deskew_with_details",
    "detect_skew_angle",
    "estimate_angle_hough",
    "find_best_angle",
    "get_preprocessor",
    "normalize_angle",
    "preprocess",
    "preprocess_enhanced",
    "rotate_image",
    "row_sums",
    "score_candidates",
    "score_image",
    "score_rows",
    "search_best_angle",
]
