"""Type introspection helpers.

This module provides the helpers used at lookup time to enumerate the fields of a class and to
normalize the keys naming them.
"""
import inspect
from typing import Any, ClassVar, NamedTuple, get_origin

type FieldName = str


class FieldKey(NamedTuple):
    """Type-level marker wrapping a field name. Lookups accept it wherever a field name is
    accepted.

    Examples:
        >>> size(Box, FieldKey("w")) == size(Box, "w")
        True
    """

    name: FieldName


def is_class_var(annotation: Any) -> bool:
    """Check if an annotation is a ClassVar, resolved or written as a string.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation marks a class variable.
    """
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def field_names(klass: type) -> tuple[FieldName, ...]:
    """Get the ordered field names of a class. Fields are the annotated names of the class and
    its bases, base classes first, class variables excluded.

    Args:
        klass (type): The class to inspect.

    Returns:
        tuple[str, ...]: The field names in declaration order.
    """
    names: dict[FieldName, None] = {}
    for base in reversed(klass.__mro__):
        for name, annotation in inspect.get_annotations(base).items():
            if not is_class_var(annotation):
                names.setdefault(name, None)
    return tuple(names)


def field_name_of(key: Any) -> FieldName | None:
    """Get the field name designated by a lookup key.

    Args:
        key (Any): A field name or a FieldKey.

    Returns:
        str | None: The field name, or None if the key designates no field.
    """
    if isinstance(key, FieldKey):
        return key.name
    if isinstance(key, str):
        return key
    return None


def owner_of(obj: Any) -> type:
    """Get the class a lookup refers to: the object itself if it is a class, otherwise its type."""
    return obj if isinstance(obj, type) else type(obj)
