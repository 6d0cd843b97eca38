# -*- coding: utf-8 -*-
"""
Image Keyword List - String-keyed calibration metadata store.

``ImageKeywordlist`` wraps the flat ``key -> string`` association produced
by an external metadata reader (e.g. ``noise.noiseVector[3].pixel``) and
adds typed accessors that raise ``MalformedMetadataError`` naming the
offending key.

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
from typing import Any, Dict, Iterator, Mapping, Optional

# Third-party
import numpy as np

# s1noise internal
from s1noise.exceptions import MalformedMetadataError, ParseError
from s1noise.utils import (
    parse_float_list,
    parse_int_list,
    to_modified_julian_date,
)


class ImageKeywordlist:
    """Read-only ``key -> string`` metadata association.

    Parameters
    ----------
    keywords : Mapping[str, Any], optional
        Initial keywords. Values are stored as ``str``.

    Examples
    --------
    >>> kwl = ImageKeywordlist({'number_lines': '1500'})
    >>> kwl.has_key('number_lines')
    True
    >>> kwl.get_int('number_lines')
    1500
    """

    def __init__(self, keywords: Optional[Mapping[str, Any]] = None) -> None:
        self._keywords: Dict[str, str] = {}
        if keywords is not None:
            for key, value in keywords.items():
                self._keywords[str(key)] = str(value)

    # -----------------------------------------------------------------
    # Contract used by the noise lookup
    # -----------------------------------------------------------------
    def has_key(self, key: str) -> bool:
        """Return True if ``key`` is present."""
        return key in self._keywords

    def get_metadata_by_key(self, key: str) -> str:
        """Return the raw string stored under ``key``.

        Raises
        ------
        MalformedMetadataError
            If ``key`` is missing.
        """
        try:
            return self._keywords[key]
        except KeyError:
            raise MalformedMetadataError(
                f"Missing metadata key '{key}'"
            ) from None

    # -----------------------------------------------------------------
    # Typed accessors
    # -----------------------------------------------------------------
    def get_int(self, key: str) -> int:
        """Parse the value under ``key`` as an integer."""
        text = self.get_metadata_by_key(key)
        try:
            return int(text.strip())
        except ValueError:
            raise ParseError(
                f"Value {text!r} for key '{key}' is not an integer"
            ) from None

    def get_float(self, key: str) -> float:
        """Parse the value under ``key`` as a float."""
        text = self.get_metadata_by_key(key)
        try:
            return float(text.strip())
        except ValueError:
            raise ParseError(
                f"Value {text!r} for key '{key}' is not a number"
            ) from None

    def get_time_mjd(self, key: str) -> float:
        """Parse the date-time under ``key`` as MJD fractional day."""
        text = self.get_metadata_by_key(key)
        try:
            return to_modified_julian_date(text)
        except ParseError as e:
            raise ParseError(f"Key '{key}': {e}") from e

    def get_int_list(self, key: str) -> np.ndarray:
        """Parse the delimited integer list under ``key``."""
        return parse_int_list(self.get_metadata_by_key(key), key)

    def get_float_list(self, key: str) -> np.ndarray:
        """Parse the delimited float list under ``key``."""
        return parse_float_list(self.get_metadata_by_key(key), key)

    # -----------------------------------------------------------------
    # Mapping protocol
    # -----------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return key in self._keywords

    def __getitem__(self, key: str) -> str:
        return self.get_metadata_by_key(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keywords)

    def __len__(self) -> int:
        return len(self._keywords)

    def keys(self):
        return self._keywords.keys()

    def to_dict(self) -> Dict[str, str]:
        """Return a copy of the keywords as a plain dict."""
        return dict(self._keywords)

    def __repr__(self) -> str:
        return f"ImageKeywordlist({len(self._keywords)} keys)"
