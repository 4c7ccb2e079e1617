"""
Loading of user-selected regions of interest from JSON files.

Accepted layouts::

    {"rois": [{"x": 3, "y": 2, "width": 3, "height": 3, "name": "tree"}, ...]}
    [{"x": 3, "y": 2, "width": 3, "height": 3}, ...]
    [[3, 2, 3, 3], ...]
"""

import json
from pathlib import Path
from typing import Any, List

from utils.logger_config import get_logger

from .region import RegionOfInterest

logger = get_logger(__name__)


class RoiLoader:
    """Parses region selections into RegionOfInterest values."""

    @staticmethod
    def roi_path(pair_folder: Path) -> Path:
        return pair_folder / f"rois_{pair_folder.name}.json"

    @staticmethod
    def load(roi_file: Path) -> List[RegionOfInterest]:
        """
        Load selections from a JSON file.

        Args:
            roi_file: Path to the JSON file

        Returns:
            List[RegionOfInterest]: Selections in file order

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON is invalid or holds no region list
        """
        if not roi_file.exists():
            raise FileNotFoundError(f"ROI file not found: {roi_file}")

        try:
            with open(roi_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in ROI file {roi_file}: {e}")

        rois = RoiLoader.parse(data)
        logger.info(f"Loaded {len(rois)} regions from {roi_file.name}")
        return rois

    @staticmethod
    def load_for_pair(pair_folder: Path) -> List[RegionOfInterest]:
        """Selections of a pair folder; a missing file means no selections."""
        roi_file = RoiLoader.roi_path(pair_folder)
        if not roi_file.exists():
            logger.warning(f"No ROI file for {pair_folder.name}, matching nothing")
            return []
        return RoiLoader.load(roi_file)

    @staticmethod
    def parse(data: Any) -> List[RegionOfInterest]:
        """
        Convert loaded JSON into selections.

        Malformed entries are logged and skipped; the remaining entries keep
        their file order.

        Raises:
            ValueError: If the data is not a list of regions
        """
        if isinstance(data, dict):
            data = data.get('rois', [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of regions, got {type(data).__name__}")

        rois = []
        for index, entry in enumerate(data):
            try:
                rois.append(RoiLoader._parse_entry(entry, index))
            except ValueError as e:
                logger.warning(f"Skipping region: {e}")
        return rois

    @staticmethod
    def _parse_entry(entry: Any, index: int) -> RegionOfInterest:
        if isinstance(entry, dict):
            try:
                values = [entry['x'], entry['y'], entry['width'], entry['height']]
            except KeyError as e:
                raise ValueError(f"Region {index} is missing key {e}")
            name = entry.get('name')
        elif isinstance(entry, (list, tuple)) and len(entry) == 4:
            values = list(entry)
            name = None
        else:
            raise ValueError(f"Region {index} has unsupported format: {entry!r}")

        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            raise ValueError(f"Region {index} coordinates must be integers: {values}")

        x, y, width, height = values
        if width <= 0 or height <= 0:
            raise ValueError(f"Region {index} must have a positive size: {width}x{height}")

        return RegionOfInterest(x=x, y=y, width=width, height=height, name=name)
