import numpy as np
import pytest

from src_region_match.base.errors import RegionOutOfBoundsError
from src_region_match.matching.region import RegionExtractor, RegionOfInterest


def test_extract_copies_pixels(scenario_pair):
    left, _ = scenario_pair
    region = RegionExtractor.extract(left, 3, 2, 3, 3)

    assert region.as_rect() == (3, 2, 3, 3)
    assert region.shape == (3, 3)
    assert region.pixels.dtype == np.float32
    np.testing.assert_array_equal(region.pixels, np.full((3, 3), 9, dtype=np.float32))

    left[2:5, 3:6] = 0
    assert np.all(region.pixels == 9)


def test_extract_clips_at_trailing_edge():
    image = np.arange(50, dtype=np.float32).reshape(5, 10)
    region = RegionExtractor.extract(image, 9, 0, 3, 2)

    assert region.as_rect() == (9, 0, 1, 2)
    np.testing.assert_array_equal(region.pixels, image[0:2, 9:10])


def test_extract_clips_negative_origin():
    image = np.arange(50, dtype=np.float32).reshape(5, 10)
    region = RegionExtractor.extract(image, -2, -1, 4, 3)

    assert region.as_rect() == (0, 0, 2, 2)
    np.testing.assert_array_equal(region.pixels, image[0:2, 0:2])


@pytest.mark.parametrize("x, y", [(10, 0), (0, 5), (-3, 0), (25, 40)])
def test_extract_outside_image_raises(x, y):
    image = np.zeros((5, 10), dtype=np.float32)
    with pytest.raises(RegionOutOfBoundsError):
        RegionExtractor.extract(image, x, y, 3, 3)


def test_out_of_bounds_is_an_index_error():
    image = np.zeros((5, 10), dtype=np.float32)
    with pytest.raises(IndexError):
        RegionExtractor.extract(image, 10, 0, 1, 1)


@pytest.mark.parametrize("width, height", [(0, 3), (3, 0), (-1, 2)])
def test_extract_rejects_non_positive_size(width, height):
    image = np.zeros((5, 10), dtype=np.float32)
    with pytest.raises(ValueError):
        RegionExtractor.extract(image, 0, 0, width, height)


def test_extract_rejects_color_image():
    image = np.zeros((5, 10, 3), dtype=np.float32)
    with pytest.raises(ValueError):
        RegionExtractor.extract(image, 0, 0, 2, 2)


def test_extract_roi_uses_selection_rectangle(scenario_pair):
    left, _ = scenario_pair
    roi = RegionOfInterest(3, 2, 3, 3, name="block")
    assert RegionExtractor.extract_roi(left, roi).as_rect() == roi.as_rect()
