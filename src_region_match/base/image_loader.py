"""
Stereo pair loading for batch processing.

A pair folder holds either two separate views::

    <pair>/left_<pair><ext>
    <pair>/right_<pair><ext>

or a single two-page stack ``<pair>/stack_<pair>.tif`` whose first page is the
left view and whose second page is the right view.
"""

from pathlib import Path
from typing import Tuple

import numpy as np

from utils.image_processing import ImageProcessor
from utils.logger_config import get_logger


class StereoPairLoader:
    """Loads left/right float32 grids from a pair folder."""

    def __init__(self, image_extension: str = ".png"):
        self.image_extension = image_extension
        self.logger = get_logger(f"{__name__}.StereoPairLoader")

    def left_path(self, pair_folder: Path, pair_name: str) -> Path:
        return pair_folder / f"left_{pair_name}{self.image_extension}"

    def right_path(self, pair_folder: Path, pair_name: str) -> Path:
        return pair_folder / f"right_{pair_name}{self.image_extension}"

    def stack_path(self, pair_folder: Path, pair_name: str) -> Path:
        return pair_folder / f"stack_{pair_name}.tif"

    def load_pair(self, pair_folder: Path) -> Tuple[np.ndarray, np.ndarray]:
        """
        Load the pair stored in ``pair_folder``.

        Args:
            pair_folder: Folder named after the pair

        Returns:
            Tuple[np.ndarray, np.ndarray]: (left, right) float32 grids

        Raises:
            FileNotFoundError: If neither separate views nor a stack exist
            ValueError: If the stack has fewer than two pages or heights differ
        """
        pair_name = pair_folder.name
        left_path = self.left_path(pair_folder, pair_name)
        right_path = self.right_path(pair_folder, pair_name)
        stack_path = self.stack_path(pair_folder, pair_name)

        if left_path.exists() and right_path.exists():
            left_image = ImageProcessor.load_grayscale(left_path)
            right_image = ImageProcessor.load_grayscale(right_path)
        elif stack_path.exists():
            pages = ImageProcessor.load_stack(stack_path)
            if len(pages) < 2:
                raise ValueError(f"Stack {stack_path} needs two pages, found {len(pages)}")
            if len(pages) > 2:
                self.logger.warning(f"Stack {stack_path} has {len(pages)} pages, using the first two")
            left_image, right_image = pages[0], pages[1]
        else:
            raise FileNotFoundError(
                f"No image pair found in {pair_folder}: expected {left_path.name} and "
                f"{right_path.name}, or {stack_path.name}"
            )

        ImageProcessor.validate_image_pair(left_image, right_image)
        self.logger.info(f"Loaded pair {pair_name}: left={left_image.shape[1]}x{left_image.shape[0]}, "
                         f"right={right_image.shape[1]}x{right_image.shape[0]}")
        return left_image, right_image
