# -*- coding: utf-8 -*-
"""
Sentinel-1 Thermal Noise Lookup - Per-pixel noise power interpolation.

Sentinel-1 products describe the thermal noise floor with two sparse,
irregularly sampled families of vectors:

- **Range noise vectors**: one LUT over range pixels per azimuth time.
  Between two consecutive vectors the noise is bilinear in
  (azimuth time, range pixel).
- **Azimuth noise vectors** (IPF >= 2.9): one LUT over azimuth lines per
  rectangular image block.  Inside a block the noise is linear in line.

The noise power at a pixel is the product of the two contributions.
Either family may be absent, in which case its factor is ``1.0``.

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
import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

# s1noise internal
from s1noise.exceptions import (
    DegenerateProductError,
    LookupMissError,
    MalformedMetadataError,
    S1NoiseError,
    ValidationError,
)
from s1noise.IO.keywordlist import ImageKeywordlist
from s1noise.IO.models import AzimuthNoiseVector, RangeNoiseVector
from s1noise.utils import _is_scalar, _readonly
from s1noise.vocabulary import MissPolicy

logger = logging.getLogger(__name__)


# ===================================================================
# Shared index search
# ===================================================================

def _pixel_index_array(x: np.ndarray, values: np.ndarray) -> np.ndarray:
    """Vectorized ``Sentinel1ThermalNoiseLookup.get_pixel_index``."""
    size = values.size
    pos = np.searchsorted(values, x, side='right')
    idx = np.where(pos >= size, size - 2, pos - 1)
    return np.maximum(idx, 0)


def _coerce_policy(policy: Union[MissPolicy, str]) -> MissPolicy:
    try:
        return MissPolicy(policy)
    except ValueError:
        valid = [p.value for p in MissPolicy]
        raise ValidationError(
            f"Unknown miss policy {policy!r}, expected one of {valid}"
        ) from None


# ===================================================================
# Keyword list ingestion
# ===================================================================

def _read_range_vectors(kwl: ImageKeywordlist) -> Tuple[RangeNoiseVector, ...]:
    count = kwl.get_int('noise.rangeCount')
    if count < 0:
        raise MalformedMetadataError(
            f"noise.rangeCount must be >= 0, got {count}"
        )

    vectors = []
    # The first vector's delta is taken against 0, not against itself
    last_mjd = 0.0
    for i in range(count):
        prefix = f"noise.noiseVector[{i}]."
        time_mjd = kwl.get_time_mjd(prefix + 'azimuthTime')
        vectors.append(RangeNoiseVector(
            time_mjd=time_mjd,
            delta_mjd=time_mjd - last_mjd,
            line=kwl.get_int(prefix + 'line'),
            pixels=kwl.get_int_list(prefix + 'pixel'),
            vect=kwl.get_float_list(prefix + 'noiseLut'),
        ))
        last_mjd = time_mjd
        logger.debug("Range noise vector %d: line %d, %d samples",
                     i, vectors[-1].line, len(vectors[-1]))
    return tuple(vectors)


def _read_azimuth_vectors(
    kwl: ImageKeywordlist,
) -> Tuple[AzimuthNoiseVector, ...]:
    # Products older than IPF 2.9 carry no azimuth noise
    if not kwl.has_key('noise.azimuthCount'):
        logger.debug("No noise.azimuthCount key, azimuth noise disabled")
        return ()

    count = kwl.get_int('noise.azimuthCount')
    if count < 0:
        raise MalformedMetadataError(
            f"noise.azimuthCount must be >= 0, got {count}"
        )

    vectors = []
    for i in range(count):
        prefix = f"noise.noiseAzimuthVector[{i}]."
        vectors.append(AzimuthNoiseVector(
            first_azimuth_line=kwl.get_int(prefix + 'firstAzimuthLine'),
            last_azimuth_line=kwl.get_int(prefix + 'lastAzimuthLine'),
            first_range_sample=kwl.get_int(prefix + 'firstRangeSample'),
            last_range_sample=kwl.get_int(prefix + 'lastRangeSample'),
            lines=kwl.get_int_list(prefix + 'line'),
            vect=kwl.get_float_list(prefix + 'noiseAzimuthLut'),
        ))
    return tuple(vectors)


# ===================================================================
# Lookup
# ===================================================================

class Sentinel1ThermalNoiseLookup:
    """Thermal noise power lookup for one Sentinel-1 product.

    The lookup is immutable after construction and can be shared by
    reference between threads evaluating different image tiles.

    Parameters
    ----------
    first_line_time : float
        Acquisition time of the first image line, MJD fractional day.
    last_line_time : float
        Acquisition time of the last image line, MJD fractional day.
    num_of_lines : int
        Image height in lines. Must be >= 2.
    range_noise_vectors : Sequence[RangeNoiseVector]
        Range noise vectors ordered by strictly increasing ``line``.
        Empty disables range noise; a single vector is rejected since
        no bracket can be formed.
    azimuth_noise_vectors : Sequence[AzimuthNoiseVector], optional
        Azimuth noise blocks. Empty (default) disables azimuth noise.
    miss_policy : MissPolicy or str, default=MissPolicy.RAISE
        What point queries do when no bracket matches: raise
        ``LookupMissError`` or return ``nan``.

    Raises
    ------
    DegenerateProductError
        If ``num_of_lines < 2``, only one range vector is given, range
        vector lines are not strictly increasing, or two consecutive
        range vectors share the same azimuth time.
    ValidationError
        If a list element has the wrong type or the policy is unknown.

    Examples
    --------
    >>> rng = [
    ...     RangeNoiseVector(0.0, 0.0, 0, [0, 10], [1.0, 2.0]),
    ...     RangeNoiseVector(1.0, 1.0, 100, [0, 10], [3.0, 4.0]),
    ... ]
    >>> lookup = Sentinel1ThermalNoiseLookup(0.0, 1.0, 101, rng)
    >>> lookup.get_value(5, 50)
    2.5
    """

    def __init__(
        self,
        first_line_time: float,
        last_line_time: float,
        num_of_lines: int,
        range_noise_vectors: Sequence[RangeNoiseVector],
        azimuth_noise_vectors: Sequence[AzimuthNoiseVector] = (),
        miss_policy: Union[MissPolicy, str] = MissPolicy.RAISE,
    ) -> None:
        num_of_lines = int(num_of_lines)
        if num_of_lines < 2:
            raise DegenerateProductError(
                f"num_of_lines must be >= 2, got {num_of_lines}"
            )

        range_vectors = tuple(range_noise_vectors)
        azimuth_vectors = tuple(azimuth_noise_vectors)
        self._validate_vectors(range_vectors, azimuth_vectors)

        self._first_line_time = float(first_line_time)
        self._last_line_time = float(last_line_time)
        self._num_of_lines = num_of_lines
        self._line_time_interval = (
            (self._last_line_time - self._first_line_time)
            / (num_of_lines - 1)
        )
        self._range_vectors = range_vectors
        self._azimuth_vectors = azimuth_vectors
        self._range_lines = _readonly(
            np.array([v.line for v in range_vectors], dtype=np.int64)
        )
        self._miss_policy = _coerce_policy(miss_policy)

        logger.debug(
            "Thermal noise lookup: %d lines, line interval %.3e d, "
            "%d range vectors, %d azimuth vectors",
            num_of_lines, self._line_time_interval,
            len(range_vectors), len(azimuth_vectors),
        )

    @staticmethod
    def _validate_vectors(
        range_vectors: Tuple[RangeNoiseVector, ...],
        azimuth_vectors: Tuple[AzimuthNoiseVector, ...],
    ) -> None:
        for vec in range_vectors:
            if not isinstance(vec, RangeNoiseVector):
                raise ValidationError(
                    f"Expected RangeNoiseVector, got {type(vec).__name__}"
                )
        for vec in azimuth_vectors:
            if not isinstance(vec, AzimuthNoiseVector):
                raise ValidationError(
                    f"Expected AzimuthNoiseVector, got {type(vec).__name__}"
                )

        if len(range_vectors) == 1:
            raise DegenerateProductError(
                "At least 2 range noise vectors are required to "
                "interpolate in azimuth, got 1"
            )
        for prev, vec in zip(range_vectors, range_vectors[1:]):
            if vec.line <= prev.line:
                raise DegenerateProductError(
                    f"Range noise vector lines must be strictly "
                    f"increasing, got {prev.line} then {vec.line}"
                )
            if vec.delta_mjd == 0.0:
                raise DegenerateProductError(
                    f"Range noise vector at line {vec.line} has a zero "
                    f"time step to its predecessor"
                )

    # -----------------------------------------------------------------
    # Construction from metadata
    # -----------------------------------------------------------------
    @classmethod
    def from_keywordlist(
        cls,
        kwl: Union[ImageKeywordlist, Mapping[str, Any]],
        miss_policy: Union[MissPolicy, str] = MissPolicy.RAISE,
    ) -> 'Sentinel1ThermalNoiseLookup':
        """Build a lookup from calibration metadata keywords.

        Reads ``calibration.startTime``, ``calibration.stopTime``,
        ``number_lines``, ``noise.rangeCount`` and the
        ``noise.noiseVector[i].*`` entries, plus ``noise.azimuthCount``
        and ``noise.noiseAzimuthVector[i].*`` when present.

        Parameters
        ----------
        kwl : ImageKeywordlist or Mapping[str, Any]
            Metadata keywords. A plain mapping is wrapped.
        miss_policy : MissPolicy or str, default=MissPolicy.RAISE
            Forwarded to the constructor.

        Returns
        -------
        Sentinel1ThermalNoiseLookup

        Raises
        ------
        MalformedMetadataError
            If a required key is missing or a value list is malformed.
        ParseError
            If a scalar value or date-time cannot be converted.
        DegenerateProductError
            If the vectors cannot support interpolation.
        """
        if not isinstance(kwl, ImageKeywordlist):
            if not isinstance(kwl, Mapping):
                raise ValidationError(
                    f"Expected ImageKeywordlist or mapping, got "
                    f"{type(kwl).__name__}"
                )
            kwl = ImageKeywordlist(kwl)

        try:
            first_line_time = kwl.get_time_mjd('calibration.startTime')
            last_line_time = kwl.get_time_mjd('calibration.stopTime')
            num_of_lines = kwl.get_int('number_lines')
            range_vectors = _read_range_vectors(kwl)
            azimuth_vectors = _read_azimuth_vectors(kwl)
            return cls(first_line_time, last_line_time, num_of_lines,
                       range_vectors, azimuth_vectors,
                       miss_policy=miss_policy)
        except S1NoiseError as e:
            logger.debug("Thermal noise ingestion failed: %s", e)
            raise

    # -----------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------
    @property
    def first_line_time(self) -> float:
        """Acquisition time of the first line, MJD fractional day."""
        return self._first_line_time

    @property
    def last_line_time(self) -> float:
        """Acquisition time of the last line, MJD fractional day."""
        return self._last_line_time

    @property
    def num_of_lines(self) -> int:
        return self._num_of_lines

    @property
    def line_time_interval(self) -> float:
        """Time between consecutive lines, in days."""
        return self._line_time_interval

    @property
    def range_noise_vectors(self) -> Tuple[RangeNoiseVector, ...]:
        return self._range_vectors

    @property
    def azimuth_noise_vectors(self) -> Tuple[AzimuthNoiseVector, ...]:
        return self._azimuth_vectors

    @property
    def range_count(self) -> int:
        return len(self._range_vectors)

    @property
    def azimuth_count(self) -> int:
        return len(self._azimuth_vectors)

    @property
    def miss_policy(self) -> MissPolicy:
        return self._miss_policy

    # -----------------------------------------------------------------
    # Index search
    # -----------------------------------------------------------------
    @staticmethod
    def get_pixel_index(x: float, values: Sequence[int]) -> int:
        """Index of the sample segment bracketing ``x``.

        Upper-bound search for the first element strictly greater than
        ``x``, minus one.  ``x`` at or beyond the last element maps to the
        last segment (``size - 2``) and ``x`` before the first element
        maps to the first segment (0), so a valid ``[i, i + 1]`` pair is
        always returned and out-of-range queries extrapolate.

        Parameters
        ----------
        x : float
            Query coordinate.
        values : Sequence[int]
            Strictly increasing sample coordinates, at least 2.

        Returns
        -------
        int
        """
        values = np.asarray(values)
        size = values.size
        pos = int(np.searchsorted(values, x, side='right'))
        if pos >= size:
            return size - 2
        return max(pos - 1, 0)

    def get_range_vector_index(self, y: float) -> Optional[int]:
        """Index ``i`` of the range vector pair bracketing line ``y``.

        Scans from the second vector and returns ``i - 1`` for the first
        vector ``i`` with ``y <= line``.  Lines before the first vector
        map to the first pair.

        Returns
        -------
        int or None
            None if ``y`` lies beyond the last vector.
        """
        for i in range(1, self.range_count):
            if y <= self._range_vectors[i].line:
                return i - 1
        return None

    def get_azimuth_vector_index(self, x: float, y: float) -> Optional[int]:
        """Index of the first azimuth block containing pixel ``(x, y)``.

        Returns
        -------
        int or None
            None if no block contains the pixel.
        """
        for i, vec in enumerate(self._azimuth_vectors):
            if vec.contains(x, y):
                return i
        return None

    # -----------------------------------------------------------------
    # Point queries
    # -----------------------------------------------------------------
    def _miss(self, message: str) -> float:
        if self._miss_policy is MissPolicy.RAISE:
            raise LookupMissError(message)
        return float('nan')

    def get_range_noise(self, x: float, y: float) -> float:
        """Range noise power at pixel ``(x, y)`` by bilinear interpolation.

        Interpolates linearly in azimuth time between the two range
        vectors bracketing ``y`` and linearly in range between the two
        pixel samples bracketing ``x``.  Fractions are not clamped, so
        values outside the sampled bracket are extrapolated.

        Parameters
        ----------
        x : float
            Range pixel (column).
        y : float
            Azimuth line (row).

        Returns
        -------
        float
            Noise power, or ``1.0`` when the product has no range noise.

        Raises
        ------
        LookupMissError
            If ``y`` is beyond the last range vector and the policy is
            ``MissPolicy.RAISE``.
        """
        if not self.range_count:
            return 1.0

        vec_idx = self.get_range_vector_index(y)
        if vec_idx is None:
            return self._miss(
                f"Line {y} is beyond the last range noise vector "
                f"(line {self._range_vectors[-1].line})"
            )
        vec0 = self._range_vectors[vec_idx]
        vec1 = self._range_vectors[vec_idx + 1]

        az_time = self._first_line_time + y * self._line_time_interval
        mu_y = (az_time - vec0.time_mjd) / vec1.delta_mjd

        pixel_idx = self.get_pixel_index(x, vec0.pixels)
        if pixel_idx + 1 >= len(vec1):
            return self._miss(
                f"Range noise vector at line {vec1.line} has no sample "
                f"{pixel_idx + 1} to pair with line {vec0.line}"
            )
        mu_x = ((x - vec0.pixels[pixel_idx])
                / vec0.delta_pixels[pixel_idx + 1])

        value = (
            (1.0 - mu_y) * ((1.0 - mu_x) * vec0.vect[pixel_idx]
                            + mu_x * vec0.vect[pixel_idx + 1])
            + mu_y * ((1.0 - mu_x) * vec1.vect[pixel_idx]
                      + mu_x * vec1.vect[pixel_idx + 1])
        )
        return float(value)

    def get_azimuth_noise(self, x: float, y: float) -> float:
        """Azimuth noise power at ``(x, y)``, linear in line.

        Returns
        -------
        float
            Noise power, or ``1.0`` when the product has no azimuth noise.

        Raises
        ------
        LookupMissError
            If no azimuth block contains ``(x, y)`` and the policy is
            ``MissPolicy.RAISE``.
        """
        if not self.azimuth_count:
            return 1.0

        vec_idx = self.get_azimuth_vector_index(x, y)
        if vec_idx is None:
            return self._miss(
                f"Pixel ({x}, {y}) is outside every azimuth noise block"
            )
        vec = self._azimuth_vectors[vec_idx]

        idx = self.get_pixel_index(y, vec.lines)
        line0 = vec.lines[idx]
        line1 = vec.lines[idx + 1]
        value = (vec.vect[idx] + (vec.vect[idx + 1] - vec.vect[idx])
                 * (y - line0) / (line1 - line0))
        return float(value)

    def get_value(self, x: float, y: float) -> float:
        """Thermal noise power at pixel ``(x, y)``.

        Product of :meth:`get_range_noise` and :meth:`get_azimuth_noise`.
        """
        return self.get_range_noise(x, y) * self.get_azimuth_noise(x, y)

    # -----------------------------------------------------------------
    # Vectorized evaluation
    # -----------------------------------------------------------------
    def _range_noise_array(
        self, x: np.ndarray, y: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Range noise for flat coordinate arrays, with a miss mask."""
        result = np.ones(x.shape, dtype=np.float64)
        miss = np.zeros(x.shape, dtype=bool)
        count = self.range_count
        if not count:
            return result, miss

        # First i >= 1 with y <= line[i], as in get_range_vector_index
        vec_idx = np.searchsorted(self._range_lines[1:], y, side='left')
        miss |= vec_idx >= count - 1

        for k in np.unique(vec_idx[~miss]):
            sel = np.flatnonzero(vec_idx == k)
            vec0 = self._range_vectors[k]
            vec1 = self._range_vectors[k + 1]
            xs = x[sel]

            az_time = (self._first_line_time
                       + y[sel] * self._line_time_interval)
            mu_y = (az_time - vec0.time_mjd) / vec1.delta_mjd

            p = _pixel_index_array(xs, vec0.pixels)
            short = p + 1 >= len(vec1)
            if np.any(short):
                miss[sel[short]] = True
                keep = ~short
                sel, xs, mu_y, p = sel[keep], xs[keep], mu_y[keep], p[keep]

            mu_x = (xs - vec0.pixels[p]) / vec0.delta_pixels[p + 1]
            result[sel] = (
                (1.0 - mu_y) * ((1.0 - mu_x) * vec0.vect[p]
                                + mu_x * vec0.vect[p + 1])
                + mu_y * ((1.0 - mu_x) * vec1.vect[p]
                          + mu_x * vec1.vect[p + 1])
            )

        result[miss] = np.nan
        return result, miss

    def _azimuth_noise_array(
        self, x: np.ndarray, y: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Azimuth noise for flat coordinate arrays, with a miss mask."""
        result = np.ones(x.shape, dtype=np.float64)
        if not self.azimuth_count:
            return result, np.zeros(x.shape, dtype=bool)

        # Blocks are assigned in list order, first match wins
        block = np.full(x.shape, -1, dtype=np.int64)
        for i, vec in enumerate(self._azimuth_vectors):
            inside = (
                (block < 0)
                & (x >= vec.first_range_sample) & (x <= vec.last_range_sample)
                & (y >= vec.first_azimuth_line) & (y <= vec.last_azimuth_line)
            )
            block[inside] = i
        miss = block < 0

        for i in np.unique(block[~miss]):
            sel = block == i
            vec = self._azimuth_vectors[i]
            ys = y[sel]
            p = _pixel_index_array(ys, vec.lines)
            line0 = vec.lines[p]
            line1 = vec.lines[p + 1]
            result[sel] = (vec.vect[p] + (vec.vect[p + 1] - vec.vect[p])
                           * (ys - line0) / (line1 - line0))

        result[miss] = np.nan
        return result, miss

    def get_values(
        self,
        x: Union[float, list, np.ndarray],
        y: Union[float, list, np.ndarray],
    ) -> Union[float, np.ndarray]:
        """Thermal noise power for many pixels at once.

        Accepts scalars, lists or arrays for ``x`` (range pixel) and
        ``y`` (azimuth line); the two are broadcast together.  Element-wise
        equal to :meth:`get_value`.

        Returns
        -------
        float or np.ndarray
            ``float`` for scalar inputs, otherwise a ``float64`` array of
            the broadcast shape.

        Raises
        ------
        LookupMissError
            If any pixel misses every bracket and the policy is
            ``MissPolicy.RAISE``. With ``MissPolicy.NAN`` such pixels
            are ``nan``.
        """
        if _is_scalar(x) and _is_scalar(y):
            return self.get_value(x, y)

        xs, ys = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
        )
        shape = xs.shape
        xs = xs.ravel()
        ys = ys.ravel()

        range_noise, range_miss = self._range_noise_array(xs, ys)
        azimuth_noise, azimuth_miss = self._azimuth_noise_array(xs, ys)

        if self._miss_policy is MissPolicy.RAISE:
            if np.any(range_miss):
                raise LookupMissError(
                    f"{int(range_miss.sum())} pixel(s) are not bracketed "
                    f"by the range noise vectors (last line "
                    f"{self._range_vectors[-1].line})"
                )
            if np.any(azimuth_miss):
                raise LookupMissError(
                    f"{int(azimuth_miss.sum())} pixel(s) are outside "
                    f"every azimuth noise block"
                )

        return (range_noise * azimuth_noise).reshape(shape)

    def __call__(
        self,
        x: Union[float, list, np.ndarray],
        y: Union[float, list, np.ndarray],
    ) -> Union[float, np.ndarray]:
        return self.get_values(x, y)

    def evaluate_region(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
    ) -> np.ndarray:
        """Dense noise power image over a half-open pixel window.

        Parameters
        ----------
        row_start, row_end : int
            Line range ``[row_start, row_end)``. ``row_end`` may not
            exceed ``num_of_lines``.
        col_start, col_end : int
            Range pixel range ``[col_start, col_end)``.

        Returns
        -------
        np.ndarray
            Shape ``(row_end - row_start, col_end - col_start)``, float64.

        Raises
        ------
        ValidationError
            If the window is empty, negative, or extends past the last
            image line.
        LookupMissError
            As for :meth:`get_values`.
        """
        if row_start < 0 or col_start < 0:
            raise ValidationError(
                f"Region start must be non-negative, got "
                f"({row_start}, {col_start})"
            )
        if row_end <= row_start or col_end <= col_start:
            raise ValidationError(
                f"Empty region rows [{row_start}, {row_end}) "
                f"cols [{col_start}, {col_end})"
            )
        if row_end > self._num_of_lines:
            raise ValidationError(
                f"row_end {row_end} exceeds image height "
                f"{self._num_of_lines}"
            )

        rows = np.arange(row_start, row_end)[:, np.newaxis]
        cols = np.arange(col_start, col_end)[np.newaxis, :]
        logger.debug("Evaluating thermal noise over %dx%d region",
                     rows.shape[0], cols.shape[1])
        return self.get_values(cols, rows)

    def __repr__(self) -> str:
        return (
            f"Sentinel1ThermalNoiseLookup(num_of_lines={self._num_of_lines}, "
            f"range_count={self.range_count}, "
            f"azimuth_count={self.azimuth_count}, "
            f"miss_policy={self._miss_policy.value!r})"
        )
