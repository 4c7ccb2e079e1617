"""
Base processor class for region matching and stitching modules.

This module provides the batch loop shared by the matching and stitching
processors: every pair folder inside every 'set_*' folder of the input
directory is processed independently.
"""

import datetime
from pathlib import Path
from typing import Dict, Any, List
from abc import ABC, abstractmethod

from utils.file_operations import PathManager
from utils.logger_config import get_logger


class BaseProcessor(ABC):
    """
    Base class for batch processing of image pairs.

    Provides common functionality for:
    - Configuration and path setup
    - Iteration over sets and pairs
    - Per-pair error isolation and logging
    - Processing metadata

    Subclasses implement the per-pair pipeline and result saving.
    """

    def __init__(self, config, processing_type: str):
        """
        Initialize base processor.

        Args:
            config: Configuration object with processing parameters
            processing_type: Type of processing ('matching' or 'stitching')
        """
        self.config = config
        self.processing_type = processing_type
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

        # Processing state
        self.current_pair_info = {}
        self.processing_summary = {'processed': [], 'failed': []}

        self.input_folder = None
        self.output_folder = Path(self.config.save_path_result)
        self.temp_folder = Path(self.config.save_path_temp)

        self.logger.info(f"{self.__class__.__name__} initialized for {processing_type} processing")

    def process_all_sets(self) -> Dict[str, List[str]]:
        """
        Main entry point for processing all image sets.

        Returns:
            Dict[str, List[str]]: 'set/pair' names that were processed or failed
        """
        self.logger.info(f"Starting to process all image sets for {self.processing_type}")

        try:
            set_folders = self._validate_input_structure()
        except ValueError as e:
            self.logger.error(str(e))
            return self.processing_summary

        for set_folder in set_folders:
            self._process_set(set_folder)

        self.logger.info(f"{self.processing_type} finished: "
                         f"{len(self.processing_summary['processed'])} pairs processed, "
                         f"{len(self.processing_summary['failed'])} failed")
        return self.processing_summary

    def _validate_input_structure(self) -> List[Path]:
        if not self.input_folder:
            raise ValueError("Input folder not configured")

        return PathManager.validate_input_structure(self.input_folder)

    def _process_set(self, set_folder: Path) -> None:
        set_name = set_folder.name
        self.logger.info(f"Processing set: {set_name}")

        pair_folders = sorted(p for p in set_folder.iterdir() if p.is_dir())

        if not pair_folders:
            self.logger.warning(f"No pair directories found in {set_name}")
            return

        for pair_folder in pair_folders:
            try:
                self._process_image_pair(set_name, pair_folder)
                self.processing_summary['processed'].append(f"{set_name}/{pair_folder.name}")
            except Exception as e:
                self.logger.error(f"Failed to process pair {pair_folder.name} in set {set_name}: {e}")
                self.processing_summary['failed'].append(f"{set_name}/{pair_folder.name}")
                continue

        self.logger.info(f"Set {set_name} processed")

    def _process_image_pair(self, set_name: str, pair_folder: Path) -> None:
        """
        Process a single image pair through the complete pipeline.

        Args:
            set_name: Name of the image set
            pair_folder: Path to the pair folder
        """
        pair_name = pair_folder.name
        self.logger.info(f"Processing image pair: {set_name}/{pair_name}")

        self._setup_processing_context(set_name, pair_name, pair_folder)

        processing_results = self._execute_processing_pipeline(pair_folder)
        self._save_processing_results(processing_results, pair_name)

        self.logger.info(f"Successfully processed {set_name}/{pair_name}")

    def _setup_processing_context(self, set_name: str, pair_name: str, pair_folder: Path) -> None:
        self.current_pair_info = {
            'set_name': set_name,
            'pair_name': pair_name,
            'pair_folder': str(pair_folder),
            'timestamp': datetime.datetime.now().isoformat(),
            'processing_type': self.processing_type
        }

    def _create_comprehensive_metadata(self, processing_results: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create metadata for the processed pair.

        Args:
            processing_results: Serializable results from processing operations

        Returns:
            Dict[str, Any]: Metadata
        """
        return {
            'pair_info': self.current_pair_info,
            'processing_version': f'{self.processing_type}_processor_v1.0',
            'configuration': self._get_processor_specific_config(),
            'processing_results': processing_results
        }

    @abstractmethod
    def _setup_input_folder(self) -> None:
        """Setup input folder path specific to processor type."""
        pass

    @abstractmethod
    def _execute_processing_pipeline(self, pair_folder: Path) -> Dict[str, Any]:
        """
        Execute the main processing pipeline for a single pair.

        Args:
            pair_folder: Path to the pair folder

        Returns:
            Dict[str, Any]: Processing results
        """
        pass

    @abstractmethod
    def _save_processing_results(self, processing_results: Dict[str, Any], pair_name: str) -> None:
        """
        Save processing results using the appropriate file manager.

        Args:
            processing_results: Results from processing
            pair_name: Name of the image pair
        """
        pass

    @abstractmethod
    def _get_processor_specific_config(self) -> Dict[str, Any]:
        """Processor-specific configuration parameters for metadata."""
        pass
