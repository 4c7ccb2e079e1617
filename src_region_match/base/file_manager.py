"""
Base file management utilities for region matching outputs.

This module provides a unified base class for file operations of the matching
and stitching modules.
"""

from pathlib import Path
from typing import Dict, Any
from abc import ABC, abstractmethod

from utils.file_operations import PathManager, DataSaver
from utils.logger_config import get_logger


class BaseFileManager(ABC):
    """
    Base class for file management operations.

    Provides common functionality for:
    - Directory structure setup
    - Metadata saving
    - Save statistics and result logging

    Subclasses implement module-specific save operations.
    """

    def __init__(self, base_output_path: Path, folder_name: str = ""):
        """
        Initialize base file manager.

        Args:
            base_output_path: Base path for output files
            folder_name: Specific folder name for this processing type
        """
        self.base_output_path = Path(base_output_path)
        self.folder_name = folder_name
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

        self.processing_stats = {
            'total_operations': 0,
            'successful_operations': 0,
            'failed_operations': 0
        }

    def setup_output_directory(self, set_name: str, pair_name: str) -> Path:
        """
        Set up the output directory for a specific image pair.

        Args:
            set_name: Name of the image set
            pair_name: Name of the image pair

        Returns:
            Path: Output directory of the pair
        """
        output_pair_folder = self.base_output_path / self.folder_name / set_name / pair_name
        PathManager.ensure_directory_exists(output_pair_folder)

        self.logger.info(f"Set up directory for {set_name}/{pair_name}")
        return output_pair_folder

    def record(self, success: bool) -> bool:
        """Count one save operation."""
        self.processing_stats['total_operations'] += 1
        if success:
            self.processing_stats['successful_operations'] += 1
        else:
            self.processing_stats['failed_operations'] += 1
        return success

    def save_metadata(self, metadata: Dict[str, Any], output_path: Path,
                      pair_name: str, filename_prefix: str = "metadata") -> bool:
        """
        Save metadata as ``<prefix>_<pair>.json``.

        Args:
            metadata: Metadata dictionary to save
            output_path: Output directory
            pair_name: Name of the image pair
            filename_prefix: Prefix for the metadata filename

        Returns:
            bool: True if successful
        """
        filename = f'{filename_prefix}_{pair_name}'
        success = self.record(DataSaver.save_json_data(metadata, output_path, filename))

        if not success:
            self.logger.error(f"Failed to save metadata: {output_path / filename}.json")
        return success

    def log_save_results(self, pair_name: str, results: Dict[str, bool]) -> None:
        """
        Log summary of save operation results.

        Args:
            pair_name: Name of the processed pair
            results: Save result per output name
        """
        successful = sum(1 for success in results.values() if success)
        self.logger.info(f"Save results for {pair_name}: {successful}/{len(results)} operations successful")

        failed_ops = [name for name, success in results.items() if not success]
        if failed_ops:
            self.logger.warning(f"Failed save operations: {failed_ops}")

    def get_processing_statistics(self) -> Dict[str, Any]:
        stats = self.processing_stats.copy()
        if stats['total_operations'] > 0:
            stats['success_rate'] = stats['successful_operations'] / stats['total_operations']
        else:
            stats['success_rate'] = 0
        return stats

    @abstractmethod
    def get_folder_name(self) -> str:
        """Folder name for this processing type."""
        pass
