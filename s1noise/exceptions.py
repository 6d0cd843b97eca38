# -*- coding: utf-8 -*-
"""
s1noise Exception Hierarchy - Domain-specific exceptions for noise lookups.

Provides a small exception hierarchy that lets calibration pipelines catch
thermal-noise ingestion and query errors distinctly from Python built-in
exceptions. All s1noise exceptions subclass both ``S1NoiseError`` and the
appropriate built-in exception so callers can catch them as the
built-in.

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


class S1NoiseError(Exception):
    """Base exception for all s1noise errors."""


class ValidationError(S1NoiseError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for bad region bounds, unknown policy names, and other
    argument validation failures.
    """


class MalformedMetadataError(ValidationError):
    """Calibration metadata cannot be turned into noise vectors.

    Raised during ingestion when a required keyword is missing, a
    delimited numeric list fails to parse, or the lists of one entry
    have mismatched lengths.
    """


class ParseError(MalformedMetadataError):
    """A single metadata value cannot be converted.

    Raised for non-numeric integers/floats and unparsable date-times.
    """


class DegenerateProductError(ValidationError):
    """Noise vectors that make interpolation undefined.

    Raised during ingestion for fewer than 2 image lines, vectors with
    fewer than 2 samples, non-increasing sample coordinates, or a zero
    time step between consecutive range vectors.
    """


class LookupMissError(S1NoiseError, LookupError):
    """Query point outside every sampled bracket.

    Raised by point queries when no range vector pair brackets the
    requested line, or no azimuth block contains the requested pixel,
    and the lookup is configured with ``MissPolicy.RAISE``.
    """
