# -*- coding: utf-8 -*-
"""
Tests for the range and azimuth noise vector dataclasses.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
import dataclasses

# Third-party
import numpy as np
import pytest

# s1noise
from s1noise.exceptions import DegenerateProductError, MalformedMetadataError
from s1noise.IO.models import AzimuthNoiseVector, RangeNoiseVector


def _range_table():
    return [
        RangeNoiseVector(time_mjd=0.0, delta_mjd=0.0, line=0,
                         pixels=[0, 10], vect=[1.0, 2.0]),
        RangeNoiseVector(time_mjd=1.0, delta_mjd=1.0, line=100,
                         pixels=[0, 10], vect=[3.0, 4.0]),
    ]


def _azimuth_blocks():
    return [
        AzimuthNoiseVector(first_azimuth_line=0, last_azimuth_line=100,
                           first_range_sample=0, last_range_sample=4,
                           lines=[0, 100], vect=[1.0, 2.0]),
        AzimuthNoiseVector(first_azimuth_line=0, last_azimuth_line=100,
                           first_range_sample=5, last_range_sample=10,
                           lines=[0, 50, 100], vect=[2.0, 2.0, 4.0]),
    ]


# ===================================================================
# Noise vector models
# ===================================================================

class TestNoiseVectors:
    """Test invariants enforced by the vector dataclasses."""

    def test_delta_pixels_against_zero(self):
        vec = RangeNoiseVector(0.0, 0.0, 0, [4, 10, 30], [1.0, 1.0, 1.0])
        np.testing.assert_array_equal(vec.delta_pixels, [4, 6, 20])

    def test_arrays_read_only(self):
        vec = _range_table()[0]
        with pytest.raises(ValueError):
            vec.pixels[0] = 3
        with pytest.raises(ValueError):
            vec.vect[0] = 3.0

    def test_frozen(self):
        vec = _range_table()[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            vec.line = 5

    def test_length_mismatch(self):
        with pytest.raises(MalformedMetadataError):
            RangeNoiseVector(0.0, 0.0, 0, [0, 10, 20], [1.0, 2.0])

    def test_single_sample(self):
        with pytest.raises(DegenerateProductError):
            RangeNoiseVector(0.0, 0.0, 0, [0], [1.0])

    def test_non_increasing_pixels(self):
        with pytest.raises(DegenerateProductError):
            RangeNoiseVector(0.0, 0.0, 0, [0, 10, 10], [1.0, 2.0, 3.0])

    def test_azimuth_non_increasing_lines(self):
        with pytest.raises(DegenerateProductError):
            AzimuthNoiseVector(0, 10, 0, 5, [5, 0], [1.0, 2.0])

    def test_azimuth_contains_inclusive(self):
        vec = _azimuth_blocks()[0]
        assert vec.contains(0, 0)
        assert vec.contains(4, 100)
        assert not vec.contains(5, 50)
        assert not vec.contains(2, 101)

    def test_len(self):
        assert len(_azimuth_blocks()[1]) == 3
        assert len(_range_table()[0]) == 2

    def test_dtypes(self):
        vec = RangeNoiseVector(0, 0, 3.0, (0, 10), (1, 2))
        assert vec.pixels.dtype == np.int64
        assert vec.vect.dtype == np.float64
        assert isinstance(vec.line, int)
        assert isinstance(vec.time_mjd, float)

    def test_input_array_not_frozen(self):
        pixels = np.array([0, 10])
        RangeNoiseVector(0.0, 0.0, 0, pixels, [1.0, 2.0])
        pixels[0] = 1
        assert pixels[0] == 1
