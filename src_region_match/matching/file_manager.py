"""
File management utilities for region matching.

This module saves the results of the matching workflow: a JSON and CSV listing
of matches, the annotated overlay image, optional SSD profile charts and
metadata.
"""

from pathlib import Path
from typing import Dict, Any, List

import numpy as np

from utils.file_operations import DataSaver
from utils.image import ScoreProfileChartGenerator
from utils.visualizer import RegionVisualizer
from ..base import BaseFileManager
from .correspondence_search import MatchResult
from .region import RegionOfInterest

MATCH_COLUMNS = [
    'name', 'query_x', 'query_y', 'width', 'height',
    'match_x', 'match_y', 'score', 'disparity', 'candidates_evaluated'
]


class MatchingFileManager(BaseFileManager):
    """Manages file operations for region matching."""

    def __init__(self, base_output_path: Path):
        super().__init__(base_output_path, "region_matches")

    def get_folder_name(self) -> str:
        return "region_matches"

    @staticmethod
    def match_rows(matches: List[MatchResult]) -> List[Dict[str, Any]]:
        """Flatten matches into table rows."""
        return [
            {
                'name': m.name,
                'query_x': m.query.x,
                'query_y': m.query.y,
                'width': m.query.width,
                'height': m.query.height,
                'match_x': m.region.x,
                'match_y': m.region.y,
                'score': m.score,
                'disparity': m.disparity,
                'candidates_evaluated': m.candidates_evaluated
            }
            for m in matches
        ]

    def save_matches(self, matches: List[MatchResult], output_path: Path, pair_name: str) -> Dict[str, bool]:
        """
        Save matches as ``matches_<pair>.json`` and ``matches_<pair>.csv``.

        Returns:
            Dict[str, bool]: Save result per format
        """
        data = {'pair_name': pair_name, 'matches': [m.to_dict() for m in matches]}
        results = {
            'json': self.record(DataSaver.save_json_data(data, output_path, f'matches_{pair_name}')),
            'csv': self.record(DataSaver.save_table(
                self.match_rows(matches), output_path, f'matches_{pair_name}', MATCH_COLUMNS
            ))
        }
        self.logger.info(f"Saved {len(matches)} matches for {pair_name}")
        return results

    def save_overlay(
        self,
        left_image: np.ndarray,
        right_image: np.ndarray,
        rois: List[RegionOfInterest],
        matches: List[MatchResult],
        output_path: Path,
        pair_name: str
    ) -> bool:
        """Save the side-by-side overlay of selections and matches."""
        try:
            overlay = RegionVisualizer.create_match_overlay(
                left_image, right_image,
                [roi.as_rect() for roi in rois],
                [m.region.as_rect() for m in matches]
            )
        except Exception as e:
            self.logger.error(f"Failed to render overlay for {pair_name}: {e}")
            return self.record(False)

        return self.record(DataSaver.save_image(overlay, output_path, f'overlay_{pair_name}'))

    def save_score_profiles(self, matches: List[MatchResult], output_path: Path,
                            pair_name: str) -> Dict[str, bool]:
        """Plot the per-offset SSD of every match that recorded a profile."""
        results = {}
        chart = ScoreProfileChartGenerator(save_path_result=output_path / 'score_profiles')

        for match in matches:
            if match.score_profile is None:
                continue
            key = f'profile_{match.name}'
            try:
                saved = chart.create_score_profile(
                    match.score_profile, match.offset,
                    photo_name=f'{pair_name}_{match.name}',
                    title=f'{match.name} {match.query.as_rect()}'
                )
                results[key] = self.record(saved is not None)
            except Exception as e:
                self.logger.error(f"Failed to plot score profile for {match.name}: {e}")
                results[key] = self.record(False)

        return results
