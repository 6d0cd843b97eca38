# -*- coding: utf-8 -*-
"""
Integration tests - keyword list ingestion through per-pixel queries.

Builds a synthetic calibration keyword list in the layout produced by
Sentinel-1 metadata readers and checks that ingestion agrees with
explicit construction.

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

# Third-party
import numpy as np
import pytest

# s1noise
from s1noise import (
    AzimuthNoiseVector,
    DegenerateProductError,
    ImageKeywordlist,
    MalformedMetadataError,
    MissPolicy,
    ParseError,
    RangeNoiseVector,
    Sentinel1ThermalNoiseLookup,
    ValidationError,
)
from s1noise.utils import to_modified_julian_date


# ===================================================================
# Synthetic keyword list
# ===================================================================

# 11 lines, one second apart; range vectors at lines 0, 5, 10
_START = '2020-01-01T00:00:00.000000'
_STOP = '2020-01-01T00:00:10.000000'
_RANGE_TIMES = [
    '2020-01-01T00:00:00.000000',
    '2020-01-01T00:00:05.000000',
    '2020-01-01T00:00:10.000000',
]
_RANGE_LINES = [0, 5, 10]
_PIXELS = '0 50 100'
_RANGE_LUTS = ['1.0 2.0 3.0', '2.0 3.0 4.0', '3.0 4.0 5.0']


def _build_keywords(with_azimuth=True):
    kw = {
        'calibration.startTime': _START,
        'calibration.stopTime': _STOP,
        'number_lines': '11',
        'noise.rangeCount': '3',
    }
    for i, (t, line, lut) in enumerate(
        zip(_RANGE_TIMES, _RANGE_LINES, _RANGE_LUTS)
    ):
        prefix = f'noise.noiseVector[{i}].'
        kw[prefix + 'azimuthTime'] = t
        kw[prefix + 'line'] = str(line)
        kw[prefix + 'pixel'] = _PIXELS
        kw[prefix + 'noiseLut'] = lut

    if with_azimuth:
        kw['noise.azimuthCount'] = '2'
        blocks = [
            ('0', '10', '0', '49', '0:10', '1.0:2.0'),
            ('0', '10', '50', '100', '0:5:10', '2.0:2.0:1.0'),
        ]
        for i, (fl, ll, fs, ls, lines, lut) in enumerate(blocks):
            prefix = f'noise.noiseAzimuthVector[{i}].'
            kw[prefix + 'firstAzimuthLine'] = fl
            kw[prefix + 'lastAzimuthLine'] = ll
            kw[prefix + 'firstRangeSample'] = fs
            kw[prefix + 'lastRangeSample'] = ls
            kw[prefix + 'line'] = lines
            kw[prefix + 'noiseAzimuthLut'] = lut
    return kw


def _build_explicit():
    times = [to_modified_julian_date(t) for t in _RANGE_TIMES]
    range_vectors = []
    last = 0.0
    for t, line, lut in zip(times, _RANGE_LINES, _RANGE_LUTS):
        range_vectors.append(RangeNoiseVector(
            time_mjd=t, delta_mjd=t - last, line=line,
            pixels=[0, 50, 100],
            vect=[float(v) for v in lut.split()],
        ))
        last = t
    azimuth_vectors = [
        AzimuthNoiseVector(0, 10, 0, 49, [0, 10], [1.0, 2.0]),
        AzimuthNoiseVector(0, 10, 50, 100, [0, 5, 10], [2.0, 2.0, 1.0]),
    ]
    return Sentinel1ThermalNoiseLookup(
        to_modified_julian_date(_START), to_modified_julian_date(_STOP),
        11, range_vectors, azimuth_vectors,
    )


# ===================================================================
# Ingestion
# ===================================================================

class TestKeywordlistIngestion:
    """Test building a lookup from calibration keywords."""

    def test_counts(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            ImageKeywordlist(_build_keywords())
        )
        assert lookup.range_count == 3
        assert lookup.azimuth_count == 2
        assert lookup.num_of_lines == 11

    def test_plain_dict_accepted(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        assert lookup.range_count == 3

    def test_line_time_interval(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        assert lookup.line_time_interval == pytest.approx(1.0 / 86400.0)

    def test_first_delta_is_against_zero(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        first = lookup.range_noise_vectors[0]
        assert first.delta_mjd == first.time_mjd

    def test_deltas_between_vectors(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        for vec in lookup.range_noise_vectors[1:]:
            assert vec.delta_mjd * 86400.0 == pytest.approx(5.0, abs=1e-5)

    def test_delta_pixels(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        np.testing.assert_array_equal(
            lookup.range_noise_vectors[0].delta_pixels, [0, 50, 50],
        )

    def test_azimuth_blocks_parsed(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        block = lookup.azimuth_noise_vectors[1]
        assert block.first_range_sample == 50
        assert block.last_range_sample == 100
        np.testing.assert_array_equal(block.lines, [0, 5, 10])

    def test_legacy_product_without_azimuth(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords(with_azimuth=False)
        )
        assert lookup.azimuth_count == 0
        assert lookup.get_azimuth_noise(70, 3) == 1.0

    def test_matches_explicit_construction(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        explicit = _build_explicit()
        np.testing.assert_allclose(
            lookup.evaluate_region(0, 11, 0, 101),
            explicit.evaluate_region(0, 11, 0, 101),
            rtol=1e-12,
        )

    def test_values_at_samples(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords(with_azimuth=False)
        )
        assert lookup.get_value(0, 0) == pytest.approx(1.0, abs=1e-6)
        assert lookup.get_value(50, 5) == pytest.approx(3.0, abs=1e-6)
        assert lookup.get_value(100, 10) == pytest.approx(5.0, abs=1e-6)
        assert lookup.get_value(25, 0) == pytest.approx(1.5, abs=1e-6)

    def test_combined_value(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords()
        )
        # range 3.5 at (75, 5); block 1 azimuth LUT is 2.0 at line 5
        assert lookup.get_value(75, 5) == pytest.approx(7.0, abs=1e-5)

    def test_miss_policy_forwarded(self):
        lookup = Sentinel1ThermalNoiseLookup.from_keywordlist(
            _build_keywords(), miss_policy='nan',
        )
        assert lookup.miss_policy is MissPolicy.NAN
        assert np.isnan(lookup.get_value(101, 5))


# ===================================================================
# Ingestion errors
# ===================================================================

class TestKeywordlistErrors:
    """Test the error taxonomy for malformed calibration keywords."""

    @pytest.mark.parametrize("key", [
        'calibration.startTime',
        'number_lines',
        'noise.rangeCount',
        'noise.noiseVector[1].pixel',
        'noise.noiseVector[2].noiseLut',
        'noise.noiseAzimuthVector[0].lastRangeSample',
        'noise.noiseAzimuthVector[1].noiseAzimuthLut',
    ])
    def test_missing_key(self, key):
        kw = _build_keywords()
        del kw[key]
        with pytest.raises(MalformedMetadataError, match=key.replace(
            '[', r'\[').replace(']', r'\]')
        ):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_non_numeric_line_count(self):
        kw = _build_keywords()
        kw['number_lines'] = 'eleven'
        with pytest.raises(ParseError):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_single_line_product(self):
        kw = _build_keywords()
        kw['number_lines'] = '1'
        with pytest.raises(DegenerateProductError):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_bad_time(self):
        kw = _build_keywords()
        kw['noise.noiseVector[1].azimuthTime'] = 'soon'
        with pytest.raises(ParseError, match="azimuthTime"):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_bad_list_token(self):
        kw = _build_keywords()
        kw['noise.noiseVector[0].pixel'] = '0 fifty 100'
        with pytest.raises(MalformedMetadataError):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_length_mismatch(self):
        kw = _build_keywords()
        kw['noise.noiseVector[0].noiseLut'] = '1.0 2.0'
        with pytest.raises(MalformedMetadataError, match="coordinates"):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_single_sample_vector(self):
        kw = _build_keywords()
        kw['noise.noiseAzimuthVector[0].line'] = '0'
        kw['noise.noiseAzimuthVector[0].noiseAzimuthLut'] = '1.0'
        with pytest.raises(DegenerateProductError):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_negative_count(self):
        kw = _build_keywords()
        kw['noise.rangeCount'] = '-1'
        with pytest.raises(MalformedMetadataError, match="rangeCount"):
            Sentinel1ThermalNoiseLookup.from_keywordlist(kw)

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            Sentinel1ThermalNoiseLookup.from_keywordlist(['number_lines'])
