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
Description: Metadata channels. A channel is a named metadata category with a default value.
            It builds the annotations expanding class declarations into accessor definitions,
            holds the accessor entries those definitions register, and answers lookups:
            - size(Box, "w"): the value of one field, or the default.
            - size(Box): the values of all fields, in declaration order.
            - size.default_lookup(x, key): the default, unconditionally.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ast
import logging
from typing import Any, Callable, Final

from .annotation import FieldAnnotation, Member
from .errors import UnknownField
from .registry import AnnotationRegistry, annotation_registry
from ..codegen.emitter import DispatchKey, dispatch_key, emit
from ..codegen.errors import DuplicateFieldMetadata
from ..codegen.passes import GenerationPass, TypeKey
from ..codegen.peeler import ABSENT, Peeled, is_use_default
from ..typing.utilities import FieldKey, field_name_of, field_names, owner_of

logger = logging.getLogger(__name__)

type DefaultFactory = Callable[[type | None, Any], Any]


class _AllFields:
    def __repr__(self) -> str:
        return "ALL_FIELDS"


_ALL_FIELDS: Final = _AllFields()


class Channel(FieldAnnotation):
    """A named metadata category with a default value and its own accessor family.

    Examples:
        >>> size = new_channel("size", 0)
        >>> print(render('''
        ... @size
        ... class Box:
        ...     w: int | 5
        ...     h: int
        ... '''))
        class Box:
            w: int
            h: int
        size.register(Box, 'w', 5)

        Once the generated code ran:
        >>> size(Box, "w"), size(Box, "h"), size(Box)
        (5, 0, (5, 0))
    """

    __entries: dict[DispatchKey, Any]
    __types: set[type]
    __default_factory: DefaultFactory | None

    def __init__(self, name: str, default: Any = None) -> None:
        self.name = name
        self.default = default
        self.__entries = {}
        self.__types = set()
        self.__default_factory = None

    def __repr__(self) -> str:
        return f"<Channel {self.name} default={self.default!r}>"

    # -- generation -------------------------------------------------------------------------

    @property
    def channels(self) -> tuple[Channel, ...]:
        return (self,)

    def members(self, reference: ast.expr | None = None) -> list[Member]:
        return [(self, reference if reference is not None else self.reference())]

    def accessor_for(
        self,
        type_key: TypeKey | str,
        type_ref: ast.expr,
        field: str,
        value: Peeled,
        channel_ref: ast.expr,
        generation_pass: GenerationPass,
    ) -> ast.stmt | None:
        """Resolve one peeled value of a field.

        Args:
            type_key (TypeKey | str): Identity of the type, used to track the resolved triples.
            type_ref (ast.expr): Expression naming the type in emitted code.
            field (str): The field name.
            value (ast.expr | Absent): The peeled value.
            channel_ref (ast.expr): Expression naming this channel in emitted code.
            generation_pass (GenerationPass): The pass recording the resolved triples.

        Raises:
            DuplicateFieldMetadata: Raised if the triple already received a value in the pass.

        Returns:
            ast.stmt | None: The accessor definition, or None if the value is absent or the
                use-default marker.
        """
        if not isinstance(value, ast.expr) or is_use_default(value):
            generation_pass.record_default(type_key, field, self.name)
            return None
        generation_pass.record_value(type_key, field, self.name)
        return emit(type_ref, field, channel_ref, value)

    # -- entries ----------------------------------------------------------------------------

    def register(self, klass: type, field: str | FieldKey, value: Any) -> None:
        """Register the value of a field. This is what emitted accessor definitions call.

        Args:
            klass (type): The type declaring the field.
            field (str | FieldKey): The field.
            value (Any): The value.

        Raises:
            UnknownField: Raised if the field is not a field of the type.
            DuplicateFieldMetadata: Raised if the field already has a value on this channel.
        """
        key = dispatch_key(klass, field)
        _, name = key
        if name not in field_names(klass):
            raise UnknownField(
                f"'{klass.__name__}' has no field '{name}'.",
                type_name=klass.__name__,
                field=name,
                channel=self.name,
            )
        if key in self.__entries:
            raise DuplicateFieldMetadata(
                f"Field '{name}' of '{klass.__name__}' already has a '{self.name}' value.",
                type_name=klass.__name__,
                field=name,
                channel=self.name,
            )
        self.__entries[key] = value
        self.__types.add(klass)
        logger.debug("%s(%s, %r) = %r", self.name, klass.__name__, name, value)

    def register_type(self, klass: type) -> None:
        """Mark a type as annotated by this channel even though none of its fields has a value.
        This is what emitted type registrations call."""
        self.__types.add(klass)
        logger.debug("%s recognizes %s", self.name, klass.__name__)

    def entries(self) -> dict[DispatchKey, Any]:
        """Get a copy of the registered entries for debugging/introspection."""
        return dict(self.__entries)

    def set_default_factory(self, factory: DefaultFactory) -> DefaultFactory:
        """Compute the default from the looked up type and field instead of returning the
        constant default. Can be used as a decorator.

        Args:
            factory (DefaultFactory): Called with the type (None when there is none) and the key.

        Returns:
            DefaultFactory: The factory.
        """
        self.__default_factory = factory
        return factory

    def default_for(self, klass: type | None, key: Any) -> Any:
        """Default value of the channel for a type and key."""
        if self.__default_factory is None:
            return self.default
        return self.__default_factory(klass, field_name_of(key) or key)

    # -- lookups ----------------------------------------------------------------------------

    def recognizes(self, klass: type) -> bool:
        """Whether the channel holds an entry for the type or one of its bases."""
        return any(base in self.__types for base in klass.__mro__)

    def has_entry(self, obj: Any, key: str | FieldKey) -> bool:
        """Whether the field has an explicit value, on its type or inherited from a base."""
        name = field_name_of(key)
        klass = owner_of(obj)
        return name is not None and any((base, name) in self.__entries for base in klass.__mro__)

    def lookup(self, obj: Any, key: str | FieldKey) -> Any:
        """Value of a field for a type or an instance.

        The entry of the type is used, or else the entry of the nearest base. A field with no
        entry gets the channel default, and so does any key looked up on a type the channel
        does not recognize.

        Args:
            obj (Any): A type or an instance.
            key (str | FieldKey): The field.

        Raises:
            UnknownField: Raised if the type is recognized but has no such field.

        Returns:
            Any: The value.
        """
        klass = owner_of(obj)
        name = field_name_of(key)
        if name is None or not self.recognizes(klass):
            return self.default_lookup(klass, key)
        for base in klass.__mro__:
            entry = self.__entries.get((base, name), ABSENT)
            if entry is not ABSENT:
                return entry
        if name not in field_names(klass):
            raise UnknownField(
                f"'{klass.__name__}' has no field '{name}'.",
                type_name=klass.__name__,
                field=name,
                channel=self.name,
            )
        return self.default_for(klass, name)

    def lookup_all(self, obj: Any) -> tuple[Any, ...]:
        """Values of all the fields of a type or an instance, in declaration order."""
        klass = owner_of(obj)
        return tuple(self.lookup(klass, name) for name in field_names(klass))

    def default_lookup(self, obj: Any, key: Any) -> Any:
        """Fallback of every lookup: the default, whatever the object and key."""
        return self.default_for(obj if isinstance(obj, type) else None, key)

    def __call__(self, obj: Any, key: Any = _ALL_FIELDS) -> Any:
        if key is _ALL_FIELDS:
            return self.lookup_all(obj)
        return self.lookup(obj, key)


def new_channel(
    name: str,
    default: Any = None,
    registry: AnnotationRegistry | None = None,
) -> Channel:
    """Create a channel and register it so that decorators and retrofit statements can name it.

    Args:
        name (str): The channel name, unique in the registry.
        default (Any): The value of fields with no explicit value.
        registry (AnnotationRegistry | None): Defaults to annotation_registry().

    Raises:
        DuplicateAnnotationName: Raised if the name is already registered.

    Returns:
        Channel: The channel.
    """
    registry = registry if registry is not None else annotation_registry()
    return registry.register(Channel(name, default))
