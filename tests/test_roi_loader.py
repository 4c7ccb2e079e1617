import json

import pytest

from src_region_match.matching.region import RegionOfInterest
from src_region_match.matching.roi_loader import RoiLoader


def test_parse_object_layout():
    rois = RoiLoader.parse({"rois": [{"x": 3, "y": 2, "width": 3, "height": 3, "name": "block"}]})
    assert rois == [RegionOfInterest(3, 2, 3, 3, name="block")]


def test_parse_list_layouts():
    rois = RoiLoader.parse([[1, 2, 3, 4], {"x": 0, "y": 0, "width": 1, "height": 1}])
    assert [roi.as_rect() for roi in rois] == [(1, 2, 3, 4), (0, 0, 1, 1)]
    assert rois[0].name is None


@pytest.mark.parametrize("entry", [
    {"x": 1, "y": 2, "width": 3},
    [1, 2, 3],
    [1, 2, 3.5, 4],
    [1, 2, 0, 4],
    [1, True, 3, 4],
    "not a region",
])
def test_parse_skips_invalid_entries(entry):
    rois = RoiLoader.parse([[0, 0, 2, 2], entry, [5, 1, 3, 3]])

    assert [roi.as_rect() for roi in rois] == [(0, 0, 2, 2), (5, 1, 3, 3)]


@pytest.mark.parametrize("data", ["not a list", {"rois": 3}])
def test_parse_rejects_non_list(data):
    with pytest.raises(ValueError):
        RoiLoader.parse(data)


def test_empty_selection():
    assert RoiLoader.parse({"rois": []}) == []
    assert RoiLoader.parse({}) == []


def test_load_for_pair_without_file(tmp_path):
    pair_folder = tmp_path / "pair_1"
    pair_folder.mkdir()
    assert RoiLoader.load_for_pair(pair_folder) == []


def test_load_for_pair(tmp_path):
    pair_folder = tmp_path / "pair_1"
    pair_folder.mkdir()
    (pair_folder / "rois_pair_1.json").write_text(json.dumps([[3, 2, 3, 3]]))

    assert RoiLoader.load_for_pair(pair_folder) == [RegionOfInterest(3, 2, 3, 3)]


def test_load_invalid_json(tmp_path):
    roi_file = tmp_path / "rois.json"
    roi_file.write_text("{not json")
    with pytest.raises(ValueError):
        RoiLoader.load(roi_file)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        RoiLoader.load(tmp_path / "missing.json")


def test_load_for_pair_keeps_valid_entries(tmp_path):
    pair_folder = tmp_path / "pair_1"
    pair_folder.mkdir()
    rois = [[3, 2, 3, 3], {"x": 1, "y": 1}]
    (pair_folder / "rois_pair_1.json").write_text(json.dumps({"rois": rois}))

    assert RoiLoader.load_for_pair(pair_folder) == [RegionOfInterest(3, 2, 3, 3)]
