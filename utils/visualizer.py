"""
Visualization utilities for region matching.

Selections and matches are drawn as rectangle outlines on 8-bit BGR copies of
the input grids: selections in yellow, matches in green.
"""

import cv2
import numpy as np
from typing import Iterable, Tuple

from utils.image_processing import ImageProcessor


class Colors:
    """Standard colors for visualization."""

    # BGR format for OpenCV
    GREEN = (0, 255, 0)
    YELLOW = (0, 255, 255)
    WHITE = (255, 255, 255)

    SELECTION = YELLOW
    MATCH = GREEN
    SEPARATOR = WHITE


class MarkerStyles:
    """Standard line widths."""

    THIN_LINE = 1


class RegionVisualizer:
    """Draws region rectangles on images."""

    @staticmethod
    def to_bgr(image: np.ndarray) -> np.ndarray:
        """Convert a float grid to an 8-bit BGR image for drawing."""
        gray = ImageProcessor.normalize_for_display(image)
        return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)

    @staticmethod
    def draw_rectangles(
        image: np.ndarray,
        rects: Iterable[Tuple[int, int, int, int]],
        color: Tuple[int, int, int],
        thickness: int = MarkerStyles.THIN_LINE
    ) -> np.ndarray:
        """
        Draw rectangle outlines.

        Args:
            image: BGR image
            rects: (x, y, width, height) rectangles
            color: BGR color tuple
            thickness: Line thickness

        Returns:
            np.ndarray: Copy of the image with the outlines drawn
        """
        img_copy = image.copy()
        for x, y, width, height in rects:
            # cv2.rectangle takes inclusive corners
            cv2.rectangle(img_copy, (x, y), (x + width - 1, y + height - 1), color, thickness)
        return img_copy

    @staticmethod
    def create_match_overlay(
        left_image: np.ndarray,
        right_image: np.ndarray,
        selections: Iterable[Tuple[int, int, int, int]],
        matches: Iterable[Tuple[int, int, int, int]],
        thickness: int = MarkerStyles.THIN_LINE
    ) -> np.ndarray:
        """
        Place the annotated left and right views side by side.

        Args:
            left_image: Left float grid
            right_image: Right float grid (same height)
            selections: Selected rectangles on the left image
            matches: Matched rectangles on the right image

        Returns:
            np.ndarray: BGR image of width left + 1 + right
        """
        left_bgr = RegionVisualizer.draw_rectangles(
            RegionVisualizer.to_bgr(left_image), selections, Colors.SELECTION, thickness
        )
        right_bgr = RegionVisualizer.draw_rectangles(
            RegionVisualizer.to_bgr(right_image), matches, Colors.MATCH, thickness
        )
        separator = np.full((left_bgr.shape[0], 1, 3), Colors.SEPARATOR, dtype=np.uint8)
        return cv2.hconcat([left_bgr, separator, right_bgr])
