# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for skyregrid.

Single source of truth for the controlled vocabularies used across the
package, so option values are guaranteed consistent and typo-free.

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
2026-02-10

Modified
--------
2026-03-02
"""

from enum import Enum
from typing import Union


class RegridMethod(Enum):
    """Resampling methods understood by the regrid engine.

    The ``value`` strings are what the ``method`` option accepts.
    """

    DRIZZLE = "drizzle"
    NEAREST = "nearest"

    @classmethod
    def coerce(cls, method: Union["RegridMethod", str]) -> "RegridMethod":
        """Return the member matching *method* (a member or its value)."""
        if isinstance(method, cls):
            return method
        return cls(method)
