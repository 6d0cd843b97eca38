# -*- coding: utf-8 -*-
"""
Noise Vector Models - Typed thermal-noise calibration records.

Frozen dataclasses for the range and azimuth thermal-noise vectors of a
Sentinel-1 product.  Sample arrays are converted to read-only numpy
arrays on construction so a vector can be shared between worker
threads without copying.

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
from dataclasses import dataclass, field

# Third-party
import numpy as np

# s1noise internal
from s1noise.exceptions import DegenerateProductError, MalformedMetadataError
from s1noise.utils import _readonly


def _check_samples(
    name: str, coords: np.ndarray, values: np.ndarray,
) -> None:
    """Validate a coordinate/value pair of sample arrays."""
    if coords.ndim != 1 or values.ndim != 1:
        raise MalformedMetadataError(
            f"{name}: sample arrays must be 1D, got shapes "
            f"{coords.shape} and {values.shape}"
        )
    if coords.size != values.size:
        raise MalformedMetadataError(
            f"{name}: {coords.size} coordinates but {values.size} values"
        )
    if coords.size < 2:
        raise DegenerateProductError(
            f"{name}: at least 2 samples are required, got {coords.size}"
        )
    if np.any(np.diff(coords) <= 0):
        raise DegenerateProductError(
            f"{name}: sample coordinates must be strictly increasing"
        )


# ===================================================================
# Range noise (one vector per azimuth time)
# ===================================================================

@dataclass(frozen=True, eq=False)
class RangeNoiseVector:
    """Thermal noise LUT in the range direction at one azimuth time.

    Parameters
    ----------
    time_mjd : float
        Azimuth time of the vector, MJD fractional day.
    delta_mjd : float
        ``time_mjd`` minus the previous vector's ``time_mjd``.  Used as
        the azimuth interpolation denominator of the bracket that ends
        at this vector.
    line : int
        Image line the vector was sampled at.
    pixels : np.ndarray
        Strictly increasing range pixel indices, shape ``(N,)``, N >= 2.
    vect : np.ndarray
        Noise power values (linear scale) aligned with ``pixels``.

    Attributes
    ----------
    delta_pixels : np.ndarray
        Consecutive differences of ``pixels``; the first entry is taken
        against an implicit previous pixel of 0, so it equals
        ``pixels[0]``.

    Raises
    ------
    MalformedMetadataError
        If ``pixels`` and ``vect`` lengths differ.
    DegenerateProductError
        If fewer than 2 samples are given or ``pixels`` is not strictly
        increasing.
    """

    time_mjd: float
    delta_mjd: float
    line: int
    pixels: np.ndarray
    vect: np.ndarray
    delta_pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        pixels = np.array(self.pixels, dtype=np.int64)
        vect = np.array(self.vect, dtype=np.float64)
        _check_samples(f"range noise vector at line {self.line}",
                       pixels, vect)

        delta = np.diff(pixels, prepend=0)

        object.__setattr__(self, 'time_mjd', float(self.time_mjd))
        object.__setattr__(self, 'delta_mjd', float(self.delta_mjd))
        object.__setattr__(self, 'line', int(self.line))
        object.__setattr__(self, 'pixels', _readonly(pixels))
        object.__setattr__(self, 'vect', _readonly(vect))
        object.__setattr__(self, 'delta_pixels', _readonly(delta))

    def __len__(self) -> int:
        return int(self.pixels.size)


# ===================================================================
# Azimuth noise (one vector per rectangular image block)
# ===================================================================

@dataclass(frozen=True, eq=False)
class AzimuthNoiseVector:
    """Thermal noise LUT in the azimuth direction over an image block.

    The block is the inclusive rectangle
    ``[first_range_sample, last_range_sample] x
    [first_azimuth_line, last_azimuth_line]``.

    Parameters
    ----------
    first_azimuth_line : int
        First azimuth line of the block.
    last_azimuth_line : int
        Last azimuth line of the block (inclusive).
    first_range_sample : int
        First range sample of the block.
    last_range_sample : int
        Last range sample of the block (inclusive).
    lines : np.ndarray
        Strictly increasing azimuth line indices, shape ``(N,)``, N >= 2.
    vect : np.ndarray
        Noise power values (linear scale) aligned with ``lines``.
    """

    first_azimuth_line: int
    last_azimuth_line: int
    first_range_sample: int
    last_range_sample: int
    lines: np.ndarray
    vect: np.ndarray

    def __post_init__(self) -> None:
        lines = np.array(self.lines, dtype=np.int64)
        vect = np.array(self.vect, dtype=np.float64)
        _check_samples(
            f"azimuth noise vector for lines "
            f"{self.first_azimuth_line}-{self.last_azimuth_line}",
            lines, vect,
        )

        for name in ('first_azimuth_line', 'last_azimuth_line',
                     'first_range_sample', 'last_range_sample'):
            object.__setattr__(self, name, int(getattr(self, name)))
        object.__setattr__(self, 'lines', _readonly(lines))
        object.__setattr__(self, 'vect', _readonly(vect))

    def contains(self, x: int, y: int) -> bool:
        """Return True if pixel ``(x, y)`` lies inside the block."""
        return (self.first_range_sample <= x <= self.last_range_sample
                and self.first_azimuth_line <= y <= self.last_azimuth_line)

    def __len__(self) -> int:
        return int(self.lines.size)
