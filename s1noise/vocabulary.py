# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for s1noise.

Controlled vocabularies for lookup configuration.

Author
------
Steven Siebert

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

from enum import Enum


class MissPolicy(Enum):
    """Behaviour of a noise lookup when a query falls outside every bracket.

    ``RAISE`` surfaces the miss as ``LookupMissError``. ``NAN`` returns
    ``nan`` for the affected pixels so that tiled callers can mask them.
    """

    RAISE = "raise"
    NAN = "nan"
