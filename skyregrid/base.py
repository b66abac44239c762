# -*- coding: utf-8 -*-
"""
Processor Base Classes - Abstract interfaces for skyregrid processors.

Defines the ``ImageProcessor`` common base class and the ``ImageTransform``
ABC for dense raster transforms such as the regridder. ``ImageProcessor``
provides version checking at first instantiation, ``typing.Annotated``
option declarations with runtime resolution through ``**kwargs``, and
progress reporting to an optional callback.

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

# Standard library
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# skyregrid internal
from skyregrid.params import ParamSpec, collect_param_specs

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all image processors.

    **Version checking**: Concrete subclasses that do not declare a processor
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    at first instantiation. The check lives in ``__new__`` so that class
    decorators have been applied by the time it runs.

    **Tunable options**: Subclasses declare options as ``typing.Annotated``
    class-body fields using markers from :mod:`skyregrid.params`.
    ``__init_subclass__`` collects them into ``__param_specs__``; at
    runtime ``_resolve_params(kwargs)`` merges instance values with
    keyword-argument overrides and validates them.
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        For each declared option, the *kwargs* value wins when present,
        otherwise the instance attribute is used. Every resolved value is
        validated against its spec.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments. Keys that are not declared options
            (e.g. ``progress_callback``) are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{option_name: resolved_value}`` for every declared option.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            else:
                value = getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(
        self, kwargs: Dict[str, Any], fraction: float
    ) -> None:
        """Report progress to an optional ``progress_callback`` kwarg.

        The callback receives the completed fraction in ``[0.0, 1.0]``.
        Anything it raises propagates to the caller of ``apply()``.
        """
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Abstract base class for image transforms.

    Subclasses implement ``apply``, which takes a source image array and
    returns a new output array.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source image array.

        Parameters
        ----------
        source : np.ndarray
            Input image, shape ``(rows, cols)``.

        Returns
        -------
        np.ndarray
            Transformed image.
        """
        ...
