# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative option constraints via typing.Annotated.

Provides constraint marker types (``Options``, ``Desc``) for use inside
``typing.Annotated`` annotations on ``ImageProcessor`` subclasses, plus the
``ParamSpec`` introspection class consumed by
``ImageProcessor.__init_subclass__``.

Usage
-----
Declare tunable options as class-body annotations::

    from typing import Annotated
    from skyregrid.params import Options, Desc

    class Regridder(ImageTransform):
        method: Annotated[str, Options('drizzle', 'nearest'),
                          Desc('Resampling method')] = 'drizzle'
        conserve_flux: Annotated[bool, Desc('Scale by cell area')] = False

Options are collected into ``cls.__param_specs__`` at class definition
time and validated by ``ImageProcessor._resolve_params``. A ``bool``
option also accepts ``numpy.bool_``, so flags read from arrays need no
conversion.

Dependencies
------------
numpy

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
2026-10-19
"""

# Standard library
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    get_origin,
    get_type_hints,
)

# Third-party
import numpy as np

# skyregrid internal
from skyregrid.exceptions import ValidationError

# numpy scalar types accepted in place of the matching builtin.
_NUMPY_EQUIVALENTS = {
    bool: np.bool_,
}


class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types.

    Any ``Annotated`` class-body field whose metadata includes at least one
    ``ParamMeta`` instance is treated as a tunable option.
    """


class Options(ParamMeta):
    """Discrete choice constraint.

    Parameters
    ----------
    *choices
        Allowed values.  Must supply at least one.
    """

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Human-readable parameter description."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


class ParamSpec:
    """Resolved specification for a single tunable option.

    Attributes
    ----------
    name : str
        Option name (keyword-argument key).
    param_type : type
        Expected Python type (``bool``, ``str``, ...).
    default : Any
        Default value declared on the class.
    description : str
        Human-readable description.
    choices : tuple or None
        Allowed values (from ``Options``).
    """

    __slots__ = ('name', 'param_type', 'default', 'description', 'choices')

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any,
        description: str,
        choices: Optional[Tuple],
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self.description = description
        self.choices = choices

    def validate(self, value: Any) -> None:
        """Validate *value* against this spec's type and choices.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        ValidationError
            If *value* is not one of the allowed choices.
        """
        if self.param_type is not object:
            accepted = (self.param_type,)
            if self.param_type in _NUMPY_EQUIVALENTS:
                accepted += (_NUMPY_EQUIVALENTS[self.param_type],)
            if not isinstance(value, accepted):
                value_type = type(value)
                raise TypeError(
                    f"Parameter '{self.name}' must be "
                    f"{self.param_type.__name__}, got "
                    f"{value_type.__module__}.{value_type.__qualname__}"
                )
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is not in allowed choices {self.choices!r}"
            )

    def __repr__(self) -> str:
        parts = (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"default={self.default!r}"
        )
        if self.choices is not None:
            parts += f", choices={self.choices!r}"
        return parts + ")"


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` type hints on *cls* into a tuple of ``ParamSpec``.

    Only fields carrying a ``ParamMeta`` marker and a class-level default
    are collected, ordered parent-first by MRO.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    seen: set = set()
    ordered_names: list = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name not in seen and name in hints:
                seen.add(name)
                ordered_names.append(name)

    specs: list = []
    for name in ordered_names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas or not hasattr(cls, name):
            continue

        options = next((m for m in metas if isinstance(m, Options)), None)
        desc = next((m for m in metas if isinstance(m, Desc)), None)
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=getattr(cls, name),
            description=desc.text if desc else '',
            choices=options.choices if options else None,
        ))

    return tuple(specs)
