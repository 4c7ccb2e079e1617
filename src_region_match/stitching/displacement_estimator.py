"""
Horizontal displacement estimation from a single feature window.

The images are assumed to come from a horizontal pan with a small overlap: a
small window taken from the right half of the left image, at mid height, is
searched for in the left half of the right image along the same row.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from utils.logger_config import get_logger

from ..base.errors import DegenerateDisplacementError, ImageShapeMismatchError
from ..matching.correspondence_search import CorrespondenceSearch, MatchResult
from ..matching.region import Region, RegionExtractor


@dataclass(frozen=True)
class DisplacementEstimate:
    """Shift between two images together with the feature that produced it."""

    dx: int
    score: float
    feature: Region
    match: MatchResult
    search_width: int

    def to_dict(self) -> dict:
        return {
            'dx': self.dx,
            'score': self.score,
            'feature': list(self.feature.as_rect()),
            'match': list(self.match.region.as_rect()),
            'search_width': self.search_width
        }


class DisplacementEstimator:
    """Estimates the horizontal shift of the right image relative to the left."""

    def __init__(
        self,
        window_size: int = 3,
        anchor_x_ratio: float = 0.75,
        anchor_y_ratio: float = 0.5,
        search_width_ratio: float = 0.5,
        search: Optional[CorrespondenceSearch] = None
    ):
        """
        Args:
            window_size: Side length of the square feature window
            anchor_x_ratio: Feature column as a fraction of the left width
            anchor_y_ratio: Feature row as a fraction of the left height
            search_width_ratio: Fraction of the right width that is scanned
            search: Correspondence search used to locate the feature
        """
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        for name, ratio in (('anchor_x_ratio', anchor_x_ratio),
                            ('anchor_y_ratio', anchor_y_ratio),
                            ('search_width_ratio', search_width_ratio)):
            if not 0 < ratio <= 1:
                raise ValueError(f"{name} must be in (0, 1], got {ratio}")

        self.window_size = window_size
        self.anchor_x_ratio = anchor_x_ratio
        self.anchor_y_ratio = anchor_y_ratio
        self.search_width_ratio = search_width_ratio
        self.search = search or CorrespondenceSearch()
        self.logger = get_logger(__name__)

    def feature_origin(self, image: np.ndarray) -> Tuple[int, int]:
        """Top-left corner of the feature window in the left image."""
        height, width = image.shape[:2]
        x = int(math.floor(self.anchor_x_ratio * width)) - 1
        y = int(math.floor(self.anchor_y_ratio * height)) - 1
        return x, y

    def default_search_width(self, image: np.ndarray) -> int:
        return int(math.ceil(image.shape[1] * self.search_width_ratio))

    def estimate(
        self,
        left_image: np.ndarray,
        right_image: np.ndarray,
        search_width: Optional[int] = None
    ) -> DisplacementEstimate:
        """
        Locate the feature window in the right image and derive the shift.

        Args:
            left_image: Left view
            right_image: Right view, same height as the left view
            search_width: Number of candidate origins to scan; defaults to
                ``ceil(right_width * search_width_ratio)``

        Returns:
            DisplacementEstimate: ``dx = feature_x - match_x`` and its score

        Raises:
            ImageShapeMismatchError: If the image heights differ
            DegenerateDisplacementError: If no candidate could be compared
        """
        if left_image.ndim != 2 or right_image.ndim != 2:
            raise ImageShapeMismatchError(
                f"Expected 2-D images, got left={left_image.shape}, right={right_image.shape}"
            )
        if left_image.shape[0] != right_image.shape[0]:
            raise ImageShapeMismatchError(
                f"Image heights don't match: left={left_image.shape[0]}, right={right_image.shape[0]}"
            )

        if search_width is None:
            search_width = self.default_search_width(right_image)

        start_x, start_y = self.feature_origin(left_image)
        feature = RegionExtractor.extract(
            left_image, start_x, start_y, self.window_size, self.window_size
        )
        if feature.as_rect() != (start_x, start_y, self.window_size, self.window_size):
            self.logger.warning(f"Feature window clipped to {feature.as_rect()}")

        match = self.search.best_match(feature, right_image, feature.y, search_width)
        if match is None:
            raise DegenerateDisplacementError(
                f"No comparable candidate for feature {feature.as_rect()} "
                f"within search width {search_width}"
            )

        dx = feature.x - match.offset
        self.logger.info(f"Estimated displacement dx={dx} "
                         f"(feature x={feature.x}, match x={match.offset}, score={match.score:.3f})")

        return DisplacementEstimate(
            dx=dx,
            score=match.score,
            feature=feature,
            match=match,
            search_width=search_width
        )

    def estimate_shift(
        self,
        left_image: np.ndarray,
        right_image: np.ndarray,
        search_width: Optional[int] = None
    ) -> Tuple[int, float]:
        """Return ``(dx, score)`` for the image pair."""
        estimate = self.estimate(left_image, right_image, search_width)
        return estimate.dx, estimate.score
