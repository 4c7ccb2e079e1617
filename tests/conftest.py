import json

import cv2
import numpy as np
import pytest

from config.config import Config


@pytest.fixture
def scenario_pair():
    """10x5 pair: a 3x3 block of 9s at (3, 2) on the left and (6, 2) on the right."""
    left = np.zeros((5, 10), dtype=np.float32)
    right = np.zeros((5, 10), dtype=np.float32)
    left[2:5, 3:6] = 9
    right[2:5, 6:9] = 9
    return left, right


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def textured_scene(rng):
    """Random 20x65 scene; every 3x3 window is unique in practice."""
    return rng.uniform(0, 255, size=(20, 65)).astype(np.float32)


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides):
        data = {
            "case_name": "case",
            "input_path": str(tmp_path / "input"),
            "result_root": str(tmp_path / "result"),
            "save_path_result": "{case_name}",
            "save_path_temp": "temp_{case_name}",
        }
        data.update(overrides)
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(data), encoding="utf-8")
        return Config(str(config_path))

    return _make


@pytest.fixture
def write_pair(tmp_path):
    """Write a uint8 left/right pair (and optional ROI list) as set_1/<pair_name>."""
    def _write(left, right, pair_name="pair_1", rois=None, set_name="set_1"):
        pair_folder = tmp_path / "input" / set_name / pair_name
        pair_folder.mkdir(parents=True)
        assert cv2.imwrite(str(pair_folder / f"left_{pair_name}.png"), left.astype(np.uint8))
        assert cv2.imwrite(str(pair_folder / f"right_{pair_name}.png"), right.astype(np.uint8))
        if rois is not None:
            (pair_folder / f"rois_{pair_name}.json").write_text(json.dumps({"rois": rois}), encoding="utf-8")
        return pair_folder

    return _write
