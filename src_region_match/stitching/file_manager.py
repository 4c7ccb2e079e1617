"""
File management utilities for mosaic stitching.
"""

from pathlib import Path
from typing import Dict, List

import numpy as np

from utils.file_operations import DataSaver
from utils.image_processing import ImageProcessor
from ..base import BaseFileManager


class MosaicFileManager(BaseFileManager):
    """Manages file operations for mosaic stitching."""

    def __init__(self, base_output_path: Path):
        super().__init__(base_output_path, "mosaics")

    def get_folder_name(self) -> str:
        return "mosaics"

    def save_mosaic(
        self,
        mosaic: np.ndarray,
        output_path: Path,
        pair_name: str,
        save_formats: List[str] = ('npy', 'png')
    ) -> Dict[str, bool]:
        """
        Save the mosaic in the requested formats.

        'npy', 'tiff' and 'csv' keep the float values; 'png' stores a
        normalized 8-bit version for viewing.

        Args:
            mosaic: float32 mosaic grid
            output_path: Output directory
            pair_name: Name of the image pair
            save_formats: Formats to write

        Returns:
            Dict[str, bool]: Save result per format
        """
        results = {}
        filename = f'mosaic_{pair_name}'

        for format_type in save_formats:
            if format_type == 'png':
                display = ImageProcessor.normalize_for_display(mosaic)
                success = DataSaver.save_image(display, output_path, filename, '.png')
            else:
                success = DataSaver.save_numpy_array(mosaic, output_path, filename, format_type)
            results[format_type] = self.record(success)

        self.logger.info(f"Saved mosaic for {pair_name} in formats: {list(save_formats)}")
        return results
