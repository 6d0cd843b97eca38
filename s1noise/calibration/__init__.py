# -*- coding: utf-8 -*-
"""
Calibration - Radiometric correction lookups for SAR products.

- ``Sentinel1ThermalNoiseLookup``: per-pixel thermal noise power from
  Sentinel-1 range and azimuth noise vectors.

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

from s1noise.calibration.thermal_noise import Sentinel1ThermalNoiseLookup

__all__ = [
    'Sentinel1ThermalNoiseLookup',
]
