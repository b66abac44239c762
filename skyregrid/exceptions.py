# -*- coding: utf-8 -*-
"""
skyregrid Exception Hierarchy - Domain-specific exceptions for regridding.

Provides a small exception hierarchy that lets callers catch skyregrid
errors distinctly from Python built-in exceptions. All skyregrid
exceptions subclass both ``SkyRegridError`` and the appropriate built-in
exception so existing ``except ValueError`` style handlers keep working.

Author
------
skyregrid contributors

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-06

Modified
--------
2026-03-02
"""


class SkyRegridError(Exception):
    """Base exception for all skyregrid errors."""


class ValidationError(SkyRegridError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for non-2D images, shape mismatches between an image and its
    astrometry, unknown regrid methods, and coordinate sequences of
    unequal length.
    """


class InvalidAstrometry(SkyRegridError, RuntimeError):
    """Astrometric mapping is unusable.

    Raised when a mapping failed to initialize from its source data, or
    when the underlying transform reports a failure. A regrid checks both
    mappings once, before any output is allocated, and aborts with this
    error if either is invalid.
    """

