# -*- coding: utf-8 -*-
"""
Astrometry Utilities - Helper functions for sky coordinate calculations.

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
2026-01-30

Modified
--------
2026-03-02
"""

from typing import Union

import numpy as np


def angular_distance(
    ra1: Union[float, np.ndarray],
    dec1: Union[float, np.ndarray],
    ra2: Union[float, np.ndarray],
    dec2: Union[float, np.ndarray],
) -> Union[float, np.ndarray]:
    """
    Great-circle distance between two sky positions.

    Uses the haversine formula, which stays accurate for the sub-arcsecond
    separations typical of neighbouring pixels.

    Parameters
    ----------
    ra1, dec1 : float or np.ndarray
        First position in degrees.
    ra2, dec2 : float or np.ndarray
        Second position in degrees.

    Returns
    -------
    float or np.ndarray
        Angular separation in arcseconds.
    """
    ra1, dec1, ra2, dec2 = (np.radians(v) for v in (ra1, dec1, ra2, dec2))
    sin_ddec = np.sin(0.5 * (dec2 - dec1))
    sin_dra = np.sin(0.5 * (ra2 - ra1))
    h = sin_ddec ** 2 + np.cos(dec1) * np.cos(dec2) * sin_dra ** 2
    return np.degrees(2.0 * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))) * 3600.0
