# -*- coding: utf-8 -*-
"""
s1noise - Sentinel-1 thermal noise lookup.

Parses the sparse range and azimuth thermal-noise vectors of a Sentinel-1
product and interpolates them to a per-pixel noise power for radiometric
calibration.

Dependencies
------------
numpy

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from s1noise.exceptions import (
    S1NoiseError,
    ValidationError,
    MalformedMetadataError,
    ParseError,
    DegenerateProductError,
    LookupMissError,
)
from s1noise.vocabulary import MissPolicy
from s1noise.IO import ImageKeywordlist, RangeNoiseVector, AzimuthNoiseVector
from s1noise.calibration import Sentinel1ThermalNoiseLookup

__all__ = [
    'S1NoiseError',
    'ValidationError',
    'MalformedMetadataError',
    'ParseError',
    'DegenerateProductError',
    'LookupMissError',
    'MissPolicy',
    'ImageKeywordlist',
    'RangeNoiseVector',
    'AzimuthNoiseVector',
    'Sentinel1ThermalNoiseLookup',
]
