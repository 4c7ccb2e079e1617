"""
Image processing utilities for region matching.

This module converts images read by OpenCV into the 2-D float32 pixel grids the
matching core works on, and back into 8-bit images for display.
"""

import cv2
import numpy as np
from typing import List
from pathlib import Path

from utils.logger_config import get_logger

logger = get_logger(__name__)


class ImageProcessor:
    """Handles common image processing operations for region matching."""

    @staticmethod
    def to_float_grid(image: np.ndarray) -> np.ndarray:
        """
        Convert an image to a single-channel float32 grid.

        Args:
            image: Grayscale, BGR or BGRA image

        Returns:
            np.ndarray: float32 array of shape (height, width)

        Raises:
            ValueError: If the image has an unsupported layout
        """
        if image is None:
            raise ValueError("Image is None")

        if image.ndim == 3:
            if image.shape[2] == 1:
                image = image[:, :, 0]
            elif image.shape[2] == 3:
                image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
            elif image.shape[2] == 4:
                image = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
            else:
                raise ValueError(f"Unsupported channel count: {image.shape[2]}")
        elif image.ndim != 2:
            raise ValueError(f"Invalid image dimensions: {image.shape}")

        return image.astype(np.float32)

    @staticmethod
    def load_grayscale(image_path: Path) -> np.ndarray:
        """
        Load an image file as a float32 grid.

        Raises:
            FileNotFoundError: If the file is missing or unreadable
        """
        image = cv2.imread(str(image_path), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise FileNotFoundError(f"Could not read image: {image_path}")
        return ImageProcessor.to_float_grid(image)

    @staticmethod
    def load_stack(stack_path: Path) -> List[np.ndarray]:
        """
        Load every page of a multi-page image (e.g. TIFF stack) as float32 grids.

        Raises:
            FileNotFoundError: If the file is missing or unreadable
        """
        success, pages = cv2.imreadmulti(str(stack_path), flags=cv2.IMREAD_UNCHANGED)
        if not success or not pages:
            raise FileNotFoundError(f"Could not read image stack: {stack_path}")
        return [ImageProcessor.to_float_grid(page) for page in pages]

    @staticmethod
    def normalize_for_display(image: np.ndarray) -> np.ndarray:
        """Stretch a float grid to the 0-255 range as uint8."""
        return cv2.normalize(
            image, None,
            alpha=0, beta=255,
            norm_type=cv2.NORM_MINMAX,
            dtype=cv2.CV_8U
        )

    @staticmethod
    def validate_image_pair(left_image: np.ndarray, right_image: np.ndarray) -> bool:
        """
        Validate that two grids can be matched against each other.

        Rectified pairs must share the same height. Differing widths are
        allowed but reported.

        Raises:
            ValueError: If images are incompatible
        """
        if left_image is None or right_image is None:
            raise ValueError("One or both images are None")

        if left_image.ndim != 2 or right_image.ndim != 2:
            raise ValueError(f"Expected 2-D images: left={left_image.shape}, right={right_image.shape}")

        if left_image.shape[0] != right_image.shape[0]:
            raise ValueError(f"Image heights don't match: "
                             f"left={left_image.shape[0]}, right={right_image.shape[0]}")

        if left_image.shape[1] != right_image.shape[1]:
            logger.warning(f"Image widths differ: "
                           f"left={left_image.shape[1]}, right={right_image.shape[1]}")

        return True
