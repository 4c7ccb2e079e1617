"""
Sum of squared differences (SSD) scoring between equally sized regions.

Lower scores mean closer intensity agreement; zero means the regions are
pixel-identical. Regions of different size are never scored.
"""

import numpy as np

from ..base.errors import RegionSizeMismatchError
from .region import Region


class SSDScorer:
    """Scores region pairs with the sum of squared pixel differences."""

    @staticmethod
    def score_blocks(left_block: np.ndarray, right_block: np.ndarray) -> float:
        """
        Calculate SSD between two pixel blocks.

        Args:
            left_block: First pixel block
            right_block: Second pixel block

        Returns:
            float: SSD value (non-negative)

        Raises:
            RegionSizeMismatchError: If blocks have different shapes
        """
        if left_block.shape != right_block.shape:
            raise RegionSizeMismatchError(
                f"Block shapes don't match: {left_block.shape} vs {right_block.shape}"
            )

        # float64 accumulation keeps large regions stable
        diff = left_block.astype(np.float64) - right_block.astype(np.float64)
        return float(np.sum(diff * diff))

    @staticmethod
    def score(a: Region, b: Region) -> float:
        """
        Calculate SSD between two regions.

        Args:
            a: First region
            b: Second region

        Returns:
            float: SSD value

        Raises:
            RegionSizeMismatchError: If the regions differ in width or height
        """
        if not a.same_size(b):
            raise RegionSizeMismatchError(
                f"Region sizes don't match: {a.width}x{a.height} vs {b.width}x{b.height}"
            )
        return SSDScorer.score_blocks(a.pixels, b.pixels)
