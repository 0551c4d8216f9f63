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
Description: Base of channels and chains: the annotation builders shared by both.
            Every builder peels, for each field, one metadata value per member channel in
            member order, and emits one accessor definition per explicit value.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ast
import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from ..codegen.emitter import emit_type
from ..codegen.locator import locate, iter_fields, field_name, table_from_dict
from ..codegen.markers import Markers
from ..codegen.passes import GenerationPass, TypeKey
from ..codegen.peeler import ABSENT, peel_annotation, chain_values, metadata_depth

if TYPE_CHECKING:
    from .channel import Channel

logger = logging.getLogger(__name__)

type Member = tuple[Channel, ast.expr]
type FieldTable = Mapping[str, ast.expr] | Iterable[tuple[str, ast.expr]] | ast.Dict


def _type_registrations(
    type_ref: ast.expr, members: list[Member], valued: set[str]
) -> list[ast.stmt]:
    """Mark the type on the members that gave none of its fields a value, so that every
    applied channel recognizes it."""
    return [
        emit_type(type_ref, channel_ref)
        for channel, channel_ref in members
        if channel.name not in valued
    ]


def consume_fields(
    class_def: ast.ClassDef,
    members: list[Member],
    generation_pass: GenerationPass,
    type_key: TypeKey | None = None,
) -> list[ast.stmt]:
    """Peel one metadata layer per member from every field of a class, in place.

    Args:
        class_def (ast.ClassDef): The class whose field annotations are stripped.
        members (list[Member]): The channels, with the expressions naming them, in
            consumption order.
        generation_pass (GenerationPass): The pass recording the resolved triples.
        type_key (TypeKey | None): Identity of the class in the pass. Defaults to a new
            declaration of the class name.

    Returns:
        list[ast.stmt]: The accessor definitions, field by field, then the type registrations.
    """
    if type_key is None:
        type_key = generation_pass.declare(class_def.name)
    accessors: list[ast.stmt] = []
    valued: set[str] = set()
    type_ref = ast.Name(class_def.name, ast.Load())
    for field in iter_fields(class_def):
        name = field_name(field)
        for channel, channel_ref in members:
            value, field.annotation = peel_annotation(field.annotation)
            accessor = channel.accessor_for(
                type_key, type_ref, name, value, channel_ref, generation_pass
            )
            if accessor is not None:
                accessors.append(accessor)
                valued.add(channel.name)
    return accessors + _type_registrations(type_ref, members, valued)


def _table_items(table: FieldTable) -> list[tuple[str, ast.expr]]:
    if isinstance(table, ast.Dict):
        return table_from_dict(table)
    if isinstance(table, Mapping):
        return list(table.items())
    return list(table)


def consume_table(
    type_ref: ast.expr,
    table: FieldTable,
    members: list[Member],
    generation_pass: GenerationPass,
    type_key: TypeKey | None = None,
) -> list[ast.stmt]:
    """Resolve a field table for an existing type. Values are chains consumed exactly as field
    annotations are, one layer per member.

    Args:
        type_ref (ast.expr): Expression naming the type, e.g. `Box` or `models.Box`.
        table (FieldTable): Field names mapped to metadata chains.
        members (list[Member]): The channels, with the expressions naming them.
        generation_pass (GenerationPass): The pass recording the resolved triples.
        type_key (TypeKey | None): Identity of the type in the pass. Defaults to the latest
            declaration of the type name.

    Returns:
        list[ast.stmt]: The accessor definitions, field by field, then the type registrations.
    """
    if type_key is None:
        type_key = generation_pass.current(ast.unparse(type_ref))
    accessors: list[ast.stmt] = []
    valued: set[str] = set()
    for name, chain in _table_items(table):
        values = chain_values(chain)
        for i, (channel, channel_ref) in enumerate(members):
            value = values[i] if i < len(values) else ABSENT
            accessor = channel.accessor_for(
                type_key, type_ref, name, value, channel_ref, generation_pass
            )
            if accessor is not None:
                accessors.append(accessor)
                valued.add(channel.name)
        if len(values) > len(members):
            logger.warning(
                "%s.%s: %d metadata value(s) left unconsumed by the retrofit",
                type_key,
                name,
                len(values) - len(members),
            )
    return accessors + _type_registrations(type_ref, members, valued)


def warn_unconsumed(class_def: ast.ClassDef) -> None:
    """Log the fields of a fully expanded class that still carry metadata values."""
    for field in iter_fields(class_def):
        depth = metadata_depth(field.annotation)
        if depth:
            logger.warning(
                "%s.%s: %d metadata value(s) left unconsumed",
                class_def.name,
                field_name(field),
                depth,
            )


class FieldAnnotation(ABC):
    """An annotation applicable to class declarations: a single channel or a chain of them."""

    name: str

    @property
    @abstractmethod
    def channels(self) -> tuple[Channel, ...]:
        """The channels of the annotation, in consumption order."""

    @abstractmethod
    def members(self, reference: ast.expr | None = None) -> list[Member]:
        """The channels of the annotation paired with the expressions naming them in emitted
        code, given the expression naming the annotation itself."""

    def reference(self) -> ast.expr:
        """Default expression naming the annotation: its name."""
        return ast.Name(self.name, ast.Load())

    def _names_self(self, decorator: ast.expr) -> bool:
        if isinstance(decorator, ast.Attribute) and decorator.attr == Markers.UPDATE:
            decorator = decorator.value
        if isinstance(decorator, ast.Name):
            return decorator.id == self.name
        return isinstance(decorator, ast.Attribute) and decorator.attr == self.name

    def _build(
        self,
        source: str | ast.AST,
        reference: ast.expr | None,
        generation_pass: GenerationPass | None,
        emit_declaration: bool,
    ) -> list[ast.stmt]:
        class_def = copy.deepcopy(locate(source).node)
        class_def.decorator_list = [
            d for d in class_def.decorator_list if not self._names_self(d)
        ]
        generation_pass = generation_pass or GenerationPass()
        if emit_declaration:
            type_key = generation_pass.declare(class_def.name)
        else:
            type_key = generation_pass.current(class_def.name)
        accessors = consume_fields(
            class_def, self.members(reference), generation_pass, type_key
        )
        logger.debug(
            "%s applied to %s: %d accessor(s)", self.name, class_def.name, len(accessors)
        )
        if emit_declaration:
            return [class_def, *accessors]
        return accessors

    def build_standalone_annotation(
        self,
        source: str | ast.AST,
        reference: ast.expr | None = None,
        generation_pass: GenerationPass | None = None,
    ) -> list[ast.stmt]:
        """Apply the annotation to a class declaration.

        The located class is copied and one metadata layer per channel is stripped from each of
        its fields; the deeper layers stay in the annotations for later annotations.

        Args:
            source (str | ast.AST): Source or tree holding the class declaration.
            reference (ast.expr | None): Expression naming the annotation in emitted code.
                Defaults to the annotation name.
            generation_pass (GenerationPass | None): Pass shared with other annotations.

        Raises:
            NoDeclarationFound: Raised if the source declares no class.
            DuplicateFieldMetadata: Raised if a triple receives two values in the pass.

        Returns:
            list[ast.stmt]: The stripped class declaration followed by the accessor definitions.
        """
        return self._build(source, reference, generation_pass, emit_declaration=True)

    def build_update_annotation(
        self,
        source: str | ast.AST,
        reference: ast.expr | None = None,
        generation_pass: GenerationPass | None = None,
    ) -> list[ast.stmt]:
        """Same as build_standalone_annotation, without the class declaration. Used to add
        accessors to a class already declared by an earlier step."""
        return self._build(source, reference, generation_pass, emit_declaration=False)

    def build_retrofit_annotation(
        self,
        type_ref: ast.expr | str,
        table: FieldTable,
        reference: ast.expr | None = None,
        generation_pass: GenerationPass | None = None,
    ) -> list[ast.stmt]:
        """Apply the annotation to an existing type from a separate field table.

        Args:
            type_ref (ast.expr | str): The type, as an expression or a dotted name.
            table (FieldTable): Field names mapped to metadata chains.
            reference (ast.expr | None): Expression naming the annotation in emitted code.
            generation_pass (GenerationPass | None): Pass shared with other annotations.

        Raises:
            DuplicateFieldMetadata: Raised if a triple receives two values in the pass.

        Returns:
            list[ast.stmt]: The accessor definitions only.
        """
        if isinstance(type_ref, str):
            type_ref = ast.parse(type_ref, mode="eval").body
        accessors = consume_table(
            type_ref, table, self.members(reference), generation_pass or GenerationPass()
        )
        logger.debug(
            "%s retrofitted on %s: %d accessor(s)",
            self.name,
            ast.unparse(type_ref),
            len(accessors),
        )
        return accessors
