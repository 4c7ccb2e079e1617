"""
Base classes for region matching and stitching modules.

This package provides the shared batch processor, file manager, stereo pair
loader and error types.
"""

from .errors import (
    RegionMatchError,
    RegionOutOfBoundsError,
    RegionSizeMismatchError,
    ImageShapeMismatchError,
    DegenerateDisplacementError
)
from .file_manager import BaseFileManager
from .image_loader import StereoPairLoader
from .processor import BaseProcessor

__all__ = [
    'RegionMatchError',
    'RegionOutOfBoundsError',
    'RegionSizeMismatchError',
    'ImageShapeMismatchError',
    'DegenerateDisplacementError',
    'BaseFileManager',
    'StereoPairLoader',
    'BaseProcessor'
]
