"""
Region matching workflow.

For every pair, the regions selected on the left view are matched along their
rows in the right view, and the matches are written out together with an
overlay image showing selections in yellow and matches in green.
"""

from pathlib import Path
from typing import Dict, Any, List, Sequence

import numpy as np

from .base import BaseProcessor, StereoPairLoader
from .matching.correspondence_search import CorrespondenceSearch, MatchResult
from .matching.file_manager import MatchingFileManager
from .matching.region import RegionOfInterest
from .matching.roi_loader import RoiLoader


class RegionMatchCalculator(BaseProcessor):
    """
    Coordinates the matching workflow over all image pairs.

    ``match_pair`` runs the workflow on in-memory images; the batch entry
    point ``create_matches`` loads pairs and selections from the input folder.
    """

    def __init__(self, config):
        super().__init__(config, "matching")

        self.search = CorrespondenceSearch()
        self.pair_loader = StereoPairLoader(self.config.image_extension)
        self.file_manager = MatchingFileManager(self.output_folder)
        self.record_profiles = self.config.is_enabled("save_score_profiles")

        self._setup_input_folder()

    def _setup_input_folder(self) -> None:
        self.input_folder = Path(self.config.input_path)

    def _get_processor_specific_config(self) -> Dict[str, Any]:
        return {
            'input_path': str(self.config.input_path),
            'image_extension': self.config.image_extension,
            'save_score_profiles': self.record_profiles
        }

    def create_matches(self) -> Dict[str, List[str]]:
        """Process all 'set_*' folders of the input directory."""
        return self.process_all_sets()

    def match_pair(
        self,
        left_image: np.ndarray,
        right_image: np.ndarray,
        rois: Sequence[RegionOfInterest]
    ) -> List[MatchResult]:
        """Match every selection of the left view in the right view."""
        return self.search.match_regions(left_image, right_image, rois, self.record_profiles)

    def _execute_processing_pipeline(self, pair_folder: Path) -> Dict[str, Any]:
        left_image, right_image = self.pair_loader.load_pair(pair_folder)
        rois = RoiLoader.load_for_pair(pair_folder)
        matches = self.match_pair(left_image, right_image, rois)

        return {
            'left_image': left_image,
            'right_image': right_image,
            'rois': rois,
            'matches': matches
        }

    def _save_processing_results(self, processing_results: Dict[str, Any], pair_name: str) -> None:
        output_path = self.file_manager.setup_output_directory(
            self.current_pair_info['set_name'], pair_name
        )
        matches = processing_results['matches']
        rois = processing_results['rois']

        results = dict(self.file_manager.save_matches(matches, output_path, pair_name))
        results['overlay'] = self.file_manager.save_overlay(
            processing_results['left_image'], processing_results['right_image'],
            rois, matches, output_path, pair_name
        )
        if self.record_profiles:
            results.update(self.file_manager.save_score_profiles(matches, output_path, pair_name))

        metadata = self._create_comprehensive_metadata({
            'regions_selected': len(rois),
            'regions_matched': len(matches),
            'matches': [m.to_dict() for m in matches]
        })
        results['metadata'] = self.file_manager.save_metadata(
            metadata, output_path, pair_name, "matching_metadata"
        )

        self.file_manager.log_save_results(pair_name, results)
