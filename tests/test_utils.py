import json

import cv2
import numpy as np
import pandas as pd
import pytest

from src_region_match.base import StereoPairLoader
from utils.file_operations import DataSaver, PathManager
from utils.image_processing import ImageProcessor
from utils.visualizer import Colors, RegionVisualizer


class TestPathManager:
    def test_next_free_directory(self, tmp_path):
        base = tmp_path / "case"
        assert PathManager.next_free_directory(base) == base

        base.mkdir()
        (tmp_path / "case(1)").mkdir()
        assert PathManager.next_free_directory(base) == tmp_path / "case(2)"

    def test_validate_input_structure(self, tmp_path):
        for name in ("set_2", "set_1", "other"):
            (tmp_path / name).mkdir()

        sets = PathManager.validate_input_structure(tmp_path)

        assert [s.name for s in sets] == ["set_1", "set_2"]

    def test_validate_input_structure_without_sets(self, tmp_path):
        with pytest.raises(ValueError):
            PathManager.validate_input_structure(tmp_path)


class TestDataSaver:
    def test_json_handles_numpy_values(self, tmp_path):
        data = {'score': np.float64(1.5), 'offset': np.int64(3), 'row': np.arange(3), 'path': tmp_path}

        assert DataSaver.save_json_data(data, tmp_path, "values")

        loaded = json.loads((tmp_path / "values.json").read_text(encoding="utf-8"))
        assert loaded == {'score': 1.5, 'offset': 3, 'row': [0, 1, 2], 'path': str(tmp_path)}

    def test_table_keeps_column_order(self, tmp_path):
        rows = [{'b': 2, 'a': 1}]

        assert DataSaver.save_table(rows, tmp_path, "table", columns=['a', 'b'])

        assert list(pd.read_csv(tmp_path / "table.csv").columns) == ['a', 'b']

    def test_unsupported_array_format(self, tmp_path):
        assert not DataSaver.save_numpy_array(np.zeros((2, 2)), tmp_path, "grid", "bmp")


class TestImageProcessor:
    def test_color_image_becomes_gray_grid(self):
        bgr = np.full((4, 6, 3), 100, dtype=np.uint8)

        grid = ImageProcessor.to_float_grid(bgr)

        assert grid.shape == (4, 6)
        assert grid.dtype == np.float32
        assert np.allclose(grid, 100)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageProcessor.load_grayscale(tmp_path / "nothing.png")

    def test_pair_heights_must_match(self):
        with pytest.raises(ValueError):
            ImageProcessor.validate_image_pair(np.zeros((4, 6)), np.zeros((5, 6)))

    def test_pair_widths_may_differ(self):
        assert ImageProcessor.validate_image_pair(np.zeros((4, 6)), np.zeros((4, 3)))


class TestRegionVisualizer:
    def test_role_colors(self):
        assert Colors.SELECTION == (0, 255, 255)
        assert Colors.MATCH == (0, 255, 0)
        assert Colors.SEPARATOR == (255, 255, 255)

    def test_overlay_layout(self, scenario_pair):
        left, right = scenario_pair

        overlay = RegionVisualizer.create_match_overlay(left, right, [(3, 2, 3, 3)], [(6, 2, 3, 3)])

        assert overlay.shape == (5, 21, 3)
        assert tuple(overlay[0, 10]) == Colors.SEPARATOR
        assert tuple(overlay[4, 5]) == Colors.SELECTION
        assert tuple(overlay[4, 11 + 8]) == Colors.MATCH


class TestStereoPairLoader:
    def test_missing_pair(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            StereoPairLoader().load_pair(tmp_path)

    def test_single_page_stack(self, tmp_path):
        pair_folder = tmp_path / "pair_1"
        pair_folder.mkdir()
        assert cv2.imwrite(str(pair_folder / "stack_pair_1.tif"), np.zeros((4, 4), dtype=np.uint8))

        with pytest.raises(ValueError):
            StereoPairLoader().load_pair(pair_folder)

    def test_height_mismatch(self, write_pair):
        pair_folder = write_pair(np.zeros((4, 6)), np.zeros((5, 6)))

        with pytest.raises(ValueError):
            StereoPairLoader().load_pair(pair_folder)
