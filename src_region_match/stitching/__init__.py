"""
Mosaic stitching module.

This module estimates the horizontal displacement between two views from a
single feature window and composes them into one mosaic.
"""

from .displacement_estimator import DisplacementEstimator, DisplacementEstimate
from .mosaic_compositor import MosaicCompositor
from .file_manager import MosaicFileManager

__all__ = [
    'DisplacementEstimator',
    'DisplacementEstimate',
    'MosaicCompositor',
    'MosaicFileManager'
]
