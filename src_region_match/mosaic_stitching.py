"""
Mosaic stitching workflow.

For every pair, the horizontal displacement is estimated from a single feature
window and the two views are composed into one mosaic. A pair whose
displacement cannot be used is reported and produces no mosaic.
"""

from pathlib import Path
from typing import Dict, Any, List, Tuple

import numpy as np

from .base import BaseProcessor, StereoPairLoader
from .stitching.displacement_estimator import DisplacementEstimator, DisplacementEstimate
from .stitching.file_manager import MosaicFileManager
from .stitching.mosaic_compositor import MosaicCompositor


class MosaicStitchCalculator(BaseProcessor):
    """Coordinates displacement estimation and mosaic composition."""

    def __init__(self, config):
        super().__init__(config, "stitching")

        self.estimator = DisplacementEstimator(**self.config.get_stitching_parameters())
        self.pair_loader = StereoPairLoader(self.config.image_extension)
        self.file_manager = MosaicFileManager(self.output_folder)

        self._setup_input_folder()

    def _setup_input_folder(self) -> None:
        self.input_folder = Path(self.config.input_path)

    def _get_processor_specific_config(self) -> Dict[str, Any]:
        params = self.config.get_stitching_parameters()
        params['mosaic_save_formats'] = list(self.config.mosaic_save_formats)
        return params

    def create_mosaics(self) -> Dict[str, List[str]]:
        """Process all 'set_*' folders of the input directory."""
        return self.process_all_sets()

    def stitch_pair(
        self,
        left_image: np.ndarray,
        right_image: np.ndarray
    ) -> Tuple[np.ndarray, DisplacementEstimate]:
        """
        Estimate the displacement and compose the mosaic.

        Raises:
            ImageShapeMismatchError: If the views differ in height
            DegenerateDisplacementError: If no usable displacement was found
        """
        estimate = self.estimator.estimate(left_image, right_image)
        mosaic = MosaicCompositor.compose(left_image, right_image, estimate.dx)
        return mosaic, estimate

    def _execute_processing_pipeline(self, pair_folder: Path) -> Dict[str, Any]:
        left_image, right_image = self.pair_loader.load_pair(pair_folder)
        mosaic, estimate = self.stitch_pair(left_image, right_image)

        return {
            'left_size': (left_image.shape[1], left_image.shape[0]),
            'right_size': (right_image.shape[1], right_image.shape[0]),
            'mosaic': mosaic,
            'estimate': estimate
        }

    def _save_processing_results(self, processing_results: Dict[str, Any], pair_name: str) -> None:
        output_path = self.file_manager.setup_output_directory(
            self.current_pair_info['set_name'], pair_name
        )
        mosaic = processing_results['mosaic']
        estimate = processing_results['estimate']

        results = self.file_manager.save_mosaic(
            mosaic, output_path, pair_name, self.config.mosaic_save_formats
        )

        metadata = self._create_comprehensive_metadata({
            'left_size': list(processing_results['left_size']),
            'right_size': list(processing_results['right_size']),
            'mosaic_size': [mosaic.shape[1], mosaic.shape[0]],
            'displacement': estimate.to_dict()
        })
        results['metadata'] = self.file_manager.save_metadata(
            metadata, output_path, pair_name, "mosaic_metadata"
        )

        self.file_manager.log_save_results(pair_name, results)
