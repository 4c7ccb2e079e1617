"""
File operation utilities for region matching and mosaic output.

This module provides path management, structured data saving and metadata
helpers shared by the matching and stitching modules.
"""

import json
import numpy as np
import cv2
import pandas as pd
from typing import Dict, Any, List
from pathlib import Path
import shutil

from utils.logger_config import get_logger

logger = get_logger(__name__)


class PathManager:
    """Manages paths and directory operations."""

    @staticmethod
    def ensure_directory_exists(path: Path, clear_if_exists: bool = False) -> Path:
        """
        Ensure directory exists, optionally clearing it if it already exists.

        Args:
            path: Directory path to create
            clear_if_exists: Whether to clear directory if it already exists

        Returns:
            Path: The created/validated directory path
        """
        if clear_if_exists and path.exists():
            shutil.rmtree(path)

        path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured directory exists: {path}")

        return path

    @staticmethod
    def next_free_directory(base_path: Path) -> Path:
        """
        Return ``base_path`` or the first of ``base(1)``, ``base(2)``, ...
        that does not exist yet.
        """
        candidate = base_path
        counter = 1
        while candidate.exists():
            candidate = base_path.with_name(f"{base_path.name}({counter})")
            counter += 1
        return candidate

    @staticmethod
    def validate_input_structure(input_path: Path) -> List[Path]:
        """
        Validate and return list of set directories in input path.

        Args:
            input_path: Input directory path

        Returns:
            List[Path]: Sorted list of set directories

        Raises:
            ValueError: If no valid set directories found
        """
        if not input_path.exists():
            raise ValueError(f"Input path does not exist: {input_path}")

        set_folders = [p for p in input_path.glob('set_*') if p.is_dir()]

        if not set_folders:
            raise ValueError(f"No 'set_*' folders found in {input_path}")

        logger.info(f"Found {len(set_folders)} set folders in {input_path}")
        return sorted(set_folders)


class DataSaver:
    """Handles saving of arrays, images and tables in standard formats."""

    @staticmethod
    def save_numpy_array(
        array: np.ndarray,
        output_path: Path,
        filename: str,
        format_type: str = 'npy'
    ) -> bool:
        """
        Save numpy array in specified format.

        Args:
            array: Numpy array to save
            output_path: Output directory
            filename: Output filename (without extension)
            format_type: Format ('npy', 'csv', 'tiff')

        Returns:
            bool: True if successful
        """
        try:
            output_path.mkdir(parents=True, exist_ok=True)

            if format_type == 'npy':
                full_path = output_path / f"{filename}.npy"
                np.save(full_path, array)
            elif format_type == 'csv':
                full_path = output_path / f"{filename}.csv"
                np.savetxt(full_path, array, delimiter=',')
            elif format_type == 'tiff':
                full_path = output_path / f"{filename}.tiff"
                if not cv2.imwrite(str(full_path), array.astype(np.float32)):
                    raise IOError(f"OpenCV could not write {full_path}")
            else:
                raise ValueError(f"Unsupported format: {format_type}")

            logger.debug(f"Saved array to {full_path}")
            return True

        except Exception as e:
            logger.error(f"Failed to save array {filename}: {e}")
            return False

    @staticmethod
    def save_image(image: np.ndarray, output_path: Path, filename: str, extension: str = '.png') -> bool:
        """
        Save an 8-bit image with OpenCV.

        Args:
            image: Grayscale or BGR uint8 image
            output_path: Output directory
            filename: Output filename (without extension)
            extension: File extension including the dot

        Returns:
            bool: True if successful
        """
        try:
            output_path.mkdir(parents=True, exist_ok=True)
            full_path = output_path / f"{filename}{extension}"
            if not cv2.imwrite(str(full_path), image):
                raise IOError(f"OpenCV could not write {full_path}")
            logger.debug(f"Saved image to {full_path}")
            return True
        except Exception as e:
            logger.error(f"Failed to save image {filename}: {e}")
            return False

    @staticmethod
    def save_json_data(
        data: Dict[str, Any],
        output_path: Path,
        filename: str,
        indent: int = 2
    ) -> bool:
        """
        Save dictionary data as JSON.

        Args:
            data: Data to save
            output_path: Output directory
            filename: Output filename (without extension)
            indent: JSON indentation

        Returns:
            bool: True if successful
        """
        try:
            output_path.mkdir(parents=True, exist_ok=True)
            full_path = output_path / f"{filename}.json"

            with open(full_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=indent, default=_json_default)

            logger.debug(f"Saved JSON to {full_path}")
            return True

        except Exception as e:
            logger.error(f"Failed to save JSON {filename}: {e}")
            return False

    @staticmethod
    def save_table(
        rows: List[Dict[str, Any]],
        output_path: Path,
        filename: str,
        columns: List[str] = None
    ) -> bool:
        """
        Save a list of records as CSV through pandas.

        Args:
            rows: Records to save
            output_path: Output directory
            filename: Output filename (without extension)
            columns: Column order (optional)

        Returns:
            bool: True if successful
        """
        try:
            output_path.mkdir(parents=True, exist_ok=True)
            full_path = output_path / f"{filename}.csv"
            pd.DataFrame(rows, columns=columns).to_csv(full_path, index=False)
            logger.debug(f"Saved table to {full_path}")
            return True
        except Exception as e:
            logger.error(f"Failed to save table {filename}: {e}")
            return False


def _json_default(value):
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
