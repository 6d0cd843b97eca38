# -*- coding: utf-8 -*-
"""
Utilities - Time conversion and metadata value parsing.

Helpers shared by the keyword-list reader and the noise lookup:
ISO 8601 to Modified Julian Date conversion, ``:``/whitespace delimited
numeric list parsing, and scalar/array input dispatch.

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
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Union

# Third-party
import numpy as np

# s1noise internal
from s1noise.exceptions import MalformedMetadataError, ParseError


#: Modified Julian Date epoch (MJD 0.0).
MJD_EPOCH = datetime(1858, 11, 17, tzinfo=timezone.utc)

_SECONDS_PER_DAY = 86400.0

_ISO_PATTERN = re.compile(
    r'^\s*(\d{4})-(\d{2})-(\d{2})'
    r'(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d+))?)?)?'
    r'\s*(?:Z|UTC|[+-]00:?00)?\s*$'
)

_LIST_SEPARATOR = re.compile(r'[:\s]+')


# ===================================================================
# Time conversion
# ===================================================================

def parse_datetime(text: str) -> datetime:
    """Parse an ISO 8601 UTC date-time string.

    Accepts ``T`` or space between date and time, an arbitrary number
    of fractional-second digits (Sentinel-1 annotations carry six), and
    an optional ``Z`` / ``UTC`` / zero-offset suffix.

    Parameters
    ----------
    text : str
        Date-time string, e.g. ``'2016-02-14T16:43:04.627506'``.

    Returns
    -------
    datetime
        Timezone-aware UTC datetime.

    Raises
    ------
    ParseError
        If ``text`` is not a recognised date-time.
    """
    match = _ISO_PATTERN.match(str(text))
    if match is None:
        raise ParseError(f"Cannot parse date-time {text!r}")

    year, month, day, hour, minute, second, frac = match.groups()
    try:
        base = datetime(
            int(year), int(month), int(day),
            int(hour or 0), int(minute or 0), int(second or 0),
            tzinfo=timezone.utc,
        )
    except ValueError as e:
        raise ParseError(f"Cannot parse date-time {text!r}: {e}") from e

    # timedelta rounds the fraction to whole microseconds
    if frac:
        base = base + timedelta(seconds=float('0.' + frac))
    return base


def to_modified_julian_date(value: Union[str, datetime]) -> float:
    """Convert a date-time to Modified Julian Date fractional day.

    Parameters
    ----------
    value : str or datetime
        ISO 8601 string or datetime. Naive datetimes are taken as UTC.

    Returns
    -------
    float
        Days since 1858-11-17T00:00:00 UTC.

    Examples
    --------
    >>> to_modified_julian_date('2000-01-01T00:00:00')
    51544.0
    >>> to_modified_julian_date('2000-01-01T12:00:00Z')
    51544.5
    """
    if isinstance(value, datetime):
        dt = value if value.tzinfo is not None else value.replace(
            tzinfo=timezone.utc
        )
    else:
        dt = parse_datetime(value)
    return (dt - MJD_EPOCH).total_seconds() / _SECONDS_PER_DAY


def from_modified_julian_date(mjd: float) -> datetime:
    """Convert a Modified Julian Date fractional day to a UTC datetime."""
    return MJD_EPOCH + timedelta(days=float(mjd))


# ===================================================================
# Delimited list parsing
# ===================================================================

def _split_tokens(text: str, key: str) -> list:
    if text is None or not str(text).strip():
        raise MalformedMetadataError(f"Empty value list for key '{key}'")
    return [t for t in _LIST_SEPARATOR.split(str(text).strip()) if t]


def parse_int_list(text: str, key: str = '') -> np.ndarray:
    """Parse a ``:``/whitespace delimited integer list.

    Parameters
    ----------
    text : str
        Delimited values, e.g. ``'0:40:80'`` or ``'0 40 80'``.
    key : str, optional
        Metadata key, used in error messages.

    Returns
    -------
    np.ndarray
        1D ``int64`` array.

    Raises
    ------
    MalformedMetadataError
        If the list is empty or a token is not an integer.
    """
    tokens = _split_tokens(text, key)
    try:
        return np.array([int(t) for t in tokens], dtype=np.int64)
    except ValueError as e:
        raise MalformedMetadataError(
            f"Cannot parse integer list for key '{key}': {e}"
        ) from e


def parse_float_list(text: str, key: str = '') -> np.ndarray:
    """Parse a ``:``/whitespace delimited float list into ``float64``."""
    tokens = _split_tokens(text, key)
    try:
        return np.array([float(t) for t in tokens], dtype=np.float64)
    except ValueError as e:
        raise MalformedMetadataError(
            f"Cannot parse float list for key '{key}': {e}"
        ) from e


# ===================================================================
# Scalar / array dispatch
# ===================================================================

def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))


def _readonly(arr: np.ndarray) -> np.ndarray:
    """Return ``arr`` with its writeable flag cleared."""
    arr.setflags(write=False)
    return arr
