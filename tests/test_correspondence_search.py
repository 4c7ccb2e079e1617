import numpy as np
import pytest

from src_region_match.matching.correspondence_search import CorrespondenceSearch
from src_region_match.matching.region import RegionExtractor, RegionOfInterest


@pytest.fixture
def search():
    return CorrespondenceSearch()


def test_block_found_on_same_row(search, scenario_pair):
    left, right = scenario_pair
    query = RegionExtractor.extract(left, 3, 2, 3, 3)

    result = search.best_match(query, right, 2, right.shape[1])

    assert result.offset == 6
    assert result.score == 0.0
    assert result.region.as_rect() == (6, 2, 3, 3)
    assert result.disparity == -3
    # origins 8 and 9 are clipped by the trailing edge and skipped
    assert result.candidates_evaluated == 8


@pytest.mark.parametrize("k", [0, 1, 17, 52])
def test_exact_copy_found_at_its_offset(search, textured_scene, k):
    query = RegionExtractor.extract(textured_scene, k, 5, 6, 4)
    target = textured_scene.copy()

    result = search.best_match(query, target, 5, target.shape[1])

    assert result.offset == k
    assert result.score == 0.0


def test_copy_moved_into_other_image(search, rng):
    left = rng.uniform(0, 255, size=(12, 40)).astype(np.float32)
    right = rng.uniform(0, 255, size=(12, 40)).astype(np.float32)
    right[4:9, 21:28] = left[4:9, 2:9]
    query = RegionExtractor.extract(left, 2, 4, 7, 5)

    result = search.best_match(query, right, 4, right.shape[1])

    assert result.offset == 21
    assert result.score == 0.0


def test_first_lowest_score_wins_ties(search):
    target = np.zeros((3, 12), dtype=np.float32)
    pattern = np.array([[1, 2], [3, 4], [5, 6]], dtype=np.float32)
    target[:, 2:4] = pattern
    target[:, 7:9] = pattern
    query = RegionExtractor.extract(target, 7, 0, 2, 3)

    result = search.best_match(query, target, 0, target.shape[1])

    assert result.offset == 2
    assert result.score == 0.0


def test_uniform_target_matches_first_candidate(search):
    target = np.full((4, 8), 5, dtype=np.float32)
    query = RegionExtractor.extract(target, 4, 1, 2, 2)

    result = search.best_match(query, target, 1, target.shape[1])

    assert result.offset == 0
    assert result.score == 0.0


def test_lowest_nonzero_score_is_selected(search):
    target = np.array([[0, 5, 9, 4, 1, 7]], dtype=np.float32)
    query = RegionExtractor.extract(np.array([[3]], dtype=np.float32), 0, 0, 1, 1)

    result = search.best_match(query, target, 0, target.shape[1])

    assert result.offset == 3
    assert result.score == 1.0


def test_trailing_edge_candidates_are_skipped(search):
    target = np.arange(10, dtype=np.float32).reshape(2, 5)
    query = RegionExtractor.extract(target, 0, 0, 3, 2)

    result = search.best_match(query, target, 0, target.shape[1])

    assert result.candidates_evaluated == 3


def test_nan_candidate_is_skipped(search):
    target = np.array([[np.nan, 5, 3, 9]], dtype=np.float32)
    query = RegionExtractor.extract(np.full((1, 1), 3, dtype=np.float32), 0, 0, 1, 1)

    result = search.best_match(query, target, 0, target.shape[1], record_profile=True)

    assert result.offset == 2
    assert result.score == 0.0
    assert result.candidates_evaluated == 3
    assert np.isnan(result.score_profile[0])


def test_all_nan_candidates_return_none(search):
    target = np.full((1, 4), np.nan, dtype=np.float32)
    query = RegionExtractor.extract(np.zeros((1, 1), dtype=np.float32), 0, 0, 1, 1)

    assert search.best_match(query, target, 0, target.shape[1]) is None


def test_no_comparable_candidate_returns_none(search):
    wide = np.zeros((2, 6), dtype=np.float32)
    narrow = np.zeros((2, 4), dtype=np.float32)
    query = RegionExtractor.extract(wide, 0, 0, 6, 2)

    assert search.best_match(query, narrow, 0, narrow.shape[1]) is None
    assert search.best_match(query, wide, 0, 0) is None


def test_row_outside_target_returns_none(search, scenario_pair):
    left, right = scenario_pair
    query = RegionExtractor.extract(left, 3, 2, 3, 3)

    assert search.best_match(query, right, 7, right.shape[1]) is None


def test_negative_search_width_raises(search, scenario_pair):
    left, right = scenario_pair
    query = RegionExtractor.extract(left, 3, 2, 3, 3)

    with pytest.raises(ValueError):
        search.best_match(query, right, 2, -1)


def test_score_profile(search, scenario_pair):
    left, right = scenario_pair
    query = RegionExtractor.extract(left, 3, 2, 3, 3)

    result = search.best_match(query, right, 2, right.shape[1], record_profile=True)
    profile = result.score_profile

    assert profile.shape == (10,)
    assert np.isnan(profile[8]) and np.isnan(profile[9])
    assert profile[6] == 0.0
    assert np.nanmin(profile) == result.score
    assert profile[0] == 9 * 81.0


def test_profile_not_recorded_by_default(search, scenario_pair):
    left, right = scenario_pair
    query = RegionExtractor.extract(left, 3, 2, 3, 3)

    assert search.best_match(query, right, 2, right.shape[1]).score_profile is None


def test_match_regions_without_selection(search, scenario_pair):
    left, right = scenario_pair
    assert search.match_regions(left, right, []) == []


def test_match_regions_scans_full_width(search, scenario_pair):
    left, right = scenario_pair
    rois = [RegionOfInterest(3, 2, 3, 3, name="block")]

    matches = search.match_regions(left, right, rois)

    assert len(matches) == 1
    assert matches[0].name == "block"
    assert matches[0].region.as_rect() == (6, 2, 3, 3)
    assert matches[0].score == 0.0


def test_failed_region_does_not_stop_others(search, scenario_pair):
    left, right = scenario_pair
    rois = [
        RegionOfInterest(20, 0, 3, 3),   # outside the left image
        RegionOfInterest(0, 0, 12, 2),   # clipped to 10 columns, only s=0 fits
        RegionOfInterest(3, 2, 3, 3),
    ]

    matches = search.match_regions(left, right, rois)

    assert [m.name for m in matches] == ["roi_2", "roi_3"]
    assert matches[0].query.as_rect() == (0, 0, 10, 2)
    assert matches[0].offset == 0
    assert matches[1].offset == 6


def test_to_dict(search, scenario_pair):
    left, right = scenario_pair
    match = search.match_regions(left, right, [RegionOfInterest(3, 2, 3, 3)])[0]

    assert match.to_dict() == {
        'name': 'roi_1',
        'query': [3, 2, 3, 3],
        'match': [6, 2, 3, 3],
        'score': 0.0,
        'offset': 6,
        'disparity': -3,
        'candidates_evaluated': 8
    }
