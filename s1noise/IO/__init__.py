# -*- coding: utf-8 -*-
"""
IO Module - Calibration metadata input.

``ImageKeywordlist`` holds the flat string metadata handed over by an
external reader; ``RangeNoiseVector`` and ``AzimuthNoiseVector`` are the
typed noise records built from it.

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

from s1noise.IO.keywordlist import ImageKeywordlist
from s1noise.IO.models import AzimuthNoiseVector, RangeNoiseVector

__all__ = [
    'ImageKeywordlist',
    'RangeNoiseVector',
    'AzimuthNoiseVector',
]
