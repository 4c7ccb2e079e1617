"""
Region value types and extraction from pixel grids.

A Region owns a dense float32 copy of the pixels it covers, so scoring never
depends on the lifetime of the source image.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from ..base.errors import RegionOutOfBoundsError


@dataclass(frozen=True)
class RegionOfInterest:
    """User selection on the left image. ``y`` is the base (top) row."""

    x: int
    y: int
    width: int
    height: int
    name: Optional[str] = None

    def as_rect(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Region:
    """Rectangle in image coordinates together with its copied pixels."""

    x: int
    y: int
    width: int
    height: int
    pixels: np.ndarray = field(repr=False, compare=False)

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), matching numpy ordering."""
        return (self.height, self.width)

    def as_rect(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def same_size(self, other: "Region") -> bool:
        return self.shape == other.shape


class RegionExtractor:
    """Cuts rectangular sub-grids out of 2-D float images."""

    @staticmethod
    def extract(
        image: np.ndarray,
        x: int,
        y: int,
        width: int,
        height: int
    ) -> Region:
        """
        Extract a region, clipping the rectangle to the image bounds.

        The returned region covers only the overlap between the requested
        rectangle and the image, so a request that runs past the trailing edge
        yields a smaller region. Its origin is the clipped origin.

        Args:
            image: 2-D pixel grid indexed as ``image[row, column]``
            x: Requested left column
            y: Requested top row
            width: Requested width in pixels
            height: Requested height in pixels

        Returns:
            Region: Region with an owned float32 pixel copy

        Raises:
            ValueError: If the image is not 2-D or the size is not positive
            RegionOutOfBoundsError: If the rectangle does not overlap the image
        """
        if image is None or image.ndim != 2:
            raise ValueError(f"Expected a 2-D image, got {None if image is None else image.shape}")

        if width <= 0 or height <= 0:
            raise ValueError(f"Region size must be positive, got {width}x{height}")

        image_height, image_width = image.shape

        x0 = max(int(x), 0)
        y0 = max(int(y), 0)
        x1 = min(int(x) + int(width), image_width)
        y1 = min(int(y) + int(height), image_height)

        if x1 <= x0 or y1 <= y0:
            raise RegionOutOfBoundsError(
                f"Region ({x}, {y}, {width}, {height}) lies outside image "
                f"of size {image_width}x{image_height}"
            )

        pixels = np.array(image[y0:y1, x0:x1], dtype=np.float32, copy=True)
        return Region(x=x0, y=y0, width=x1 - x0, height=y1 - y0, pixels=pixels)

    @staticmethod
    def extract_roi(image: np.ndarray, roi: RegionOfInterest) -> Region:
        """Extract the region described by a user selection."""
        return RegionExtractor.extract(image, roi.x, roi.y, roi.width, roi.height)
