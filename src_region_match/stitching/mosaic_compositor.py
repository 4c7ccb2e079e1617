"""
Mosaic composition of two horizontally displaced images.

Columns left of the left image's width come from the left image; every later
column comes from the right image, offset by the displacement. There is no
blending in the overlap.
"""

import numpy as np

from utils.logger_config import get_logger

from ..base.errors import DegenerateDisplacementError, ImageShapeMismatchError

logger = get_logger(__name__)


class MosaicCompositor:
    """Builds a panoramic mosaic from a left/right pair and a shift."""

    @staticmethod
    def mosaic_width(left_width: int, right_width: int, dx: int) -> int:
        return left_width + (right_width - dx)

    @staticmethod
    def validate_displacement(dx: int, right_width: int) -> None:
        """
        Check that every right-image column index ``i + dx - left_width`` stays
        in ``[0, right_width)``. At ``dx == right_width`` no column comes from
        the right image and the mosaic is the left image alone.

        Raises:
            DegenerateDisplacementError: If ``dx`` is negative or larger than
                the right image width
        """
        if isinstance(dx, bool) or not isinstance(dx, (int, np.integer)):
            raise DegenerateDisplacementError(f"Displacement must be an integer, got {dx!r}")
        if dx < 0 or dx > right_width:
            raise DegenerateDisplacementError(
                f"Displacement {dx} outside valid range [0, {right_width}]"
            )

    @staticmethod
    def compose(left_image: np.ndarray, right_image: np.ndarray, dx: int) -> np.ndarray:
        """
        Compose the mosaic.

        Args:
            left_image: Left view, shape (height, left_width)
            right_image: Right view, shape (height, right_width)
            dx: Horizontal displacement from the estimator

        Returns:
            np.ndarray: float32 mosaic of shape
                (height, left_width + right_width - dx)

        Raises:
            ImageShapeMismatchError: If the images are not 2-D or differ in height
            DegenerateDisplacementError: If ``dx`` would index outside the right image
        """
        if left_image.ndim != 2 or right_image.ndim != 2:
            raise ImageShapeMismatchError(
                f"Expected 2-D images, got left={left_image.shape}, right={right_image.shape}"
            )

        height, left_width = left_image.shape
        right_height, right_width = right_image.shape
        if height != right_height:
            raise ImageShapeMismatchError(
                f"Image heights don't match: left={height}, right={right_height}"
            )

        MosaicCompositor.validate_displacement(dx, right_width)
        dx = int(dx)

        width = MosaicCompositor.mosaic_width(left_width, right_width, dx)
        mosaic = np.empty((height, width), dtype=np.float32)
        mosaic[:, :left_width] = left_image
        mosaic[:, left_width:] = right_image[:, dx:]

        logger.info(f"Mosaic composed: {left_width} + {right_width - dx} columns "
                    f"-> {width}x{height} (dx={dx})")
        return mosaic
