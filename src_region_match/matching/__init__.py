"""
Region matching module.

This module contains region extraction, SSD scoring and the epipolar
correspondence search used to match selected regions between rectified views.
"""

from .region import Region, RegionOfInterest, RegionExtractor
from .ssd_scorer import SSDScorer
from .correspondence_search import CorrespondenceSearch, MatchResult
from .roi_loader import RoiLoader
from .file_manager import MatchingFileManager

__all__ = [
    'Region',
    'RegionOfInterest',
    'RegionExtractor',
    'SSDScorer',
    'CorrespondenceSearch',
    'MatchResult',
    'RoiLoader',
    'MatchingFileManager'
]
