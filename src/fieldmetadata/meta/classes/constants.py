"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-18
Description: Immutable namespaces (classes) of constants, used for the package settings.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
from collections.abc import Iterator
from typing import Any, NoReturn, ClassVar, get_origin

from ...abstract.exceptions.traced_exceptions import TracedException


class ConstantsInstantiationError(TracedException):
    """Instantiation error of a Constants class."""


class ConstantsCompositionError(TracedException):
    """Composition error of a Constants class."""


class ConstantsModificationError(TracedException):
    """Modification error of a Constants class."""


def _refuse_instantiation(cls: type, *_: Any, **__: Any) -> NoReturn:
    raise ConstantsInstantiationError(
        f"Cannot instantiate constant class '{cls.__name__}'.", namespace=cls.__name__
    )


def _own_constants(cls: type, allow_private: bool) -> list[str]:
    """Names of the constants declared by the class itself, in declaration order."""
    return [
        k
        for k, annotation in inspect.get_annotations(cls).items()
        if (allow_private or not k.startswith("_"))
        and annotation is not ClassVar
        and get_origin(annotation) is not ClassVar
    ]


def _check_values(cls: type, names: list[str]) -> None:
    """Ensure every declared constant has a value matching its annotation when the annotation
    is a plain type.

    Raises:
        ConstantsCompositionError: Raised when a value is missing or of the wrong type.
    """
    annotations = inspect.get_annotations(cls)
    for name in names:
        if name not in cls.__dict__:
            raise ConstantsCompositionError(
                f"Attribute '{name}' needs a value in constant class '{cls.__name__}'.",
                namespace=cls.__name__,
            )
        expected = annotations[name]
        value = cls.__dict__[name]
        if get_origin(expected) is None and isinstance(expected, type) and not isinstance(
            value, expected
        ):
            raise ConstantsCompositionError(
                f"Constant '{name}' of class '{cls.__name__}' is {value!r}, expected an instance"
                f" of '{expected.__name__}'.",
                namespace=cls.__name__,
            )


class ConstantsMetaclass(type):
    """Metaclass of constant namespaces. Annotated class attributes are constants; the class
    cannot be instantiated nor modified once created."""

    __constants__: tuple[str, ...]

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        /,
        allow_private: bool = False,
        **kwargs: Any,
    ) -> Any:
        if "__init__" in namespace or "__new__" in namespace:
            raise ConstantsCompositionError(
                f"Constant class '{name}' is disallowed to have __new__ or __init__"
                " method since it shall never be instantiated.",
                namespace=name,
            )
        namespace["__new__"] = _refuse_instantiation

        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        own = _own_constants(cls, allow_private)
        _check_values(cls, own)

        # inherited constants come first.
        names: list[str] = []
        for base in bases:
            if isinstance(base, ConstantsMetaclass):
                names.extend(k for k in base.__constants__ if k not in names)
        names.extend(k for k in own if k not in names)
        type.__setattr__(cls, "__constants__", tuple(names))
        return cls

    def __setattr__(cls, name: str, value: Any) -> NoReturn:
        raise ConstantsModificationError(
            f"Attribute '{name}' of class '{cls.__name__}' cannot be modified.",
            namespace=cls.__name__,
        )

    def __repr__(cls) -> str:
        constants = ", ".join(f"{k}={getattr(cls, k)!r}" for k in cls.__constants__)
        return f"<ConstantNamespace {cls.__name__}({constants})>"

    def __iter__(cls) -> Iterator[str]:
        return iter(cls.__constants__)

    def __contains__(cls, name: str) -> bool:
        return name in cls.__constants__

    def __len__(cls) -> int:
        return len(cls.__constants__)

    def items(cls) -> list[tuple[str, Any]]:
        """Return all constants as (name, value) pairs."""
        return [(k, getattr(cls, k)) for k in cls.__constants__]

    def values(cls) -> tuple[Any, ...]:
        """Return all constant values."""
        return tuple(getattr(cls, k) for k in cls.__constants__)


class ConstantNamespace(metaclass=ConstantsMetaclass):
    """Base class to create namespaces (class) of constants.

    Examples:
        >>> class Settings(ConstantNamespace):
        ...    A = 1 # not a constant, it needs an annotation.
        ...    B: int = 2 # a constant.

        >>> Settings.B
        2
        >>> Settings.B = 3 # raises ConstantsModificationError.
        >>> Settings() # raises ConstantsInstantiationError.
    """

    __constants__: ClassVar[tuple[str, ...]]
