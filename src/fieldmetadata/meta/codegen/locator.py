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
Description: Location of annotated declarations in a syntax tree. This includes:
            - locate: the first class declaration of a tree, searched depth-first through the
              statements wrapping it (modules, compound statements, prior generated output).
            - annotation_uses: the annotation decorators of a class, in consumption order.
            - retrofit_use: the retrofit statement form `size.retrofit(Box, {"w": 5})`.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ast
from collections.abc import Collection, Iterator
from typing import TYPE_CHECKING, NamedTuple, cast

from .errors import NoDeclarationFound, MalformedAnnotation
from .markers import Markers

if TYPE_CHECKING:
    from ..channels.annotation import FieldAnnotation
    from ..channels.registry import AnnotationRegistry


class Declaration(NamedTuple):
    """A located class declaration."""

    node: ast.ClassDef

    @property
    def type_name(self) -> str:
        return self.node.name

    @property
    def fields(self) -> list[ast.AnnAssign]:
        """The field block: annotated fields of the class body, in declaration order."""
        return list(iter_fields(self.node))


class AnnotationUse(NamedTuple):
    """A decorator naming a registered annotation.

    reference: the expression naming the annotation in the source, `size` for both `@size`
        and `@size.update`.
    update: whether the decorator is the update form.
    """

    annotation: FieldAnnotation
    reference: ast.expr
    update: bool


class RetrofitUse(NamedTuple):
    """A retrofit statement: an annotation applied to an existing type and a field table."""

    annotation: FieldAnnotation
    reference: ast.expr
    type_ref: ast.expr
    table: list[tuple[str, ast.expr]]


def parse_source(source: str | ast.AST) -> ast.AST:
    """Parse source text. A syntax tree is returned unchanged."""
    if isinstance(source, str):
        return ast.parse(source)
    return source


def _first_class(node: ast.AST) -> ast.ClassDef | None:
    if isinstance(node, ast.ClassDef):
        return node
    for child in ast.iter_child_nodes(node):
        found = _first_class(child)
        if found is not None:
            return found
    return None


def locate(source: str | ast.AST) -> Declaration:
    """Find the first class declaration of a source, depth-first.

    Statements that are not class declarations, such as accessor definitions emitted by a
    previous generation, are skipped so a tree already processed by other channels can be
    annotated again.

    Args:
        source (str | ast.AST): The source text or syntax tree to search.

    Raises:
        NoDeclarationFound: Raised if the source declares no class.

    Returns:
        Declaration: The located declaration.
    """
    node = parse_source(source)
    found = _first_class(node)
    if found is None:
        raise NoDeclarationFound(
            "No class declaration found in the annotated expression.",
            node=type(node).__name__,
        )
    return Declaration(found)


def iter_fields(class_def: ast.ClassDef) -> Iterator[ast.AnnAssign]:
    """Iterate over the annotated fields of a class body."""
    for statement in class_def.body:
        if isinstance(statement, ast.AnnAssign) and isinstance(statement.target, ast.Name):
            yield statement


def field_name(field: ast.AnnAssign) -> str:
    """Name of an annotated field yielded by iter_fields."""
    return cast(ast.Name, field.target).id


def dotted_name(expr: ast.expr) -> str | None:
    """Dotted name spelled by an expression made of names and attributes, e.g. `models.geo`."""
    if isinstance(expr, ast.Name):
        return expr.id
    if isinstance(expr, ast.Attribute):
        prefix = dotted_name(expr.value)
        return None if prefix is None else f"{prefix}.{expr.attr}"
    return None


def import_aliases(tree: ast.AST) -> set[str]:
    """Names bound by the imports of a tree: `a` and `a.b` for `import a.b`, `c` for
    `import a.b as c` and for `from a import c`.

    Args:
        tree (ast.AST): The tree to scan.

    Returns:
        set[str]: The dotted names an annotation may be accessed through.
    """
    aliases: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.asname is not None:
                    aliases.add(alias.asname)
                    continue
                parts = alias.name.split(".")
                aliases.update(".".join(parts[: i + 1]) for i in range(len(parts)))
        elif isinstance(node, ast.ImportFrom):
            aliases.update(alias.asname or alias.name for alias in node.names)
    return aliases


def resolve_reference(
    expr: ast.expr, registry: AnnotationRegistry, aliases: Collection[str] = ()
) -> FieldAnnotation | None:
    """Resolve an expression naming an annotation: `size` or `meta.size`.

    An attribute is resolved only when its prefix is a known alias, so `@settings.default` is
    not read as the `default` channel unless `settings` is one.

    Args:
        expr (ast.expr): The expression to resolve.
        registry (AnnotationRegistry): The registry holding the annotations.
        aliases (Collection[str]): Dotted names an annotation may be accessed through.

    Returns:
        FieldAnnotation | None: The annotation, or None if the expression names none.
    """
    if isinstance(expr, ast.Name):
        return registry.get(expr.id)
    if isinstance(expr, ast.Attribute) and dotted_name(expr.value) in aliases:
        return registry.get(expr.attr)
    return None


def _resolve_use(
    decorator: ast.expr, registry: AnnotationRegistry, aliases: Collection[str]
) -> AnnotationUse | None:
    if isinstance(decorator, ast.Attribute) and decorator.attr == Markers.UPDATE:
        annotation = resolve_reference(decorator.value, registry, aliases)
        if annotation is not None:
            return AnnotationUse(annotation, decorator.value, True)
    annotation = resolve_reference(decorator, registry, aliases)
    if annotation is not None:
        return AnnotationUse(annotation, decorator, False)
    return None


def annotation_uses(
    class_def: ast.ClassDef, registry: AnnotationRegistry, aliases: Collection[str] = ()
) -> tuple[list[AnnotationUse], list[ast.expr]]:
    """Split the decorators of a class into annotation uses and other decorators.

    Annotation uses are returned top to bottom, the order in which they consume the metadata
    values of each field.

    Args:
        class_def (ast.ClassDef): The class to inspect.
        registry (AnnotationRegistry): The registry holding the annotations.
        aliases (Collection[str]): Dotted names an annotation may be accessed through.

    Returns:
        tuple[list[AnnotationUse], list[ast.expr]]: The annotation uses and the remaining
            decorators, both in source order.
    """
    uses: list[AnnotationUse] = []
    others: list[ast.expr] = []
    for decorator in class_def.decorator_list:
        use = _resolve_use(decorator, registry, aliases)
        if use is None:
            others.append(decorator)
        else:
            uses.append(use)
    return uses, others


def table_from_dict(table: ast.Dict) -> list[tuple[str, ast.expr]]:
    """Read a field table given as a dict literal.

    Raises:
        MalformedAnnotation: Raised if a key is not a string literal.
    """
    entries: list[tuple[str, ast.expr]] = []
    for key, value in zip(table.keys, table.values):
        if not (isinstance(key, ast.Constant) and isinstance(key.value, str)):
            raise MalformedAnnotation(
                "Retrofit table keys must be field names given as string literals.",
                key=ast.unparse(key) if key is not None else None,
            )
        entries.append((key.value, value))
    return entries


def retrofit_use(
    statement: ast.stmt, registry: AnnotationRegistry, aliases: Collection[str] = ()
) -> RetrofitUse | None:
    """Recognize a retrofit statement.

    Two spellings are accepted: `size.retrofit(Box, {"w": 5, "h": _})` and
    `size.retrofit(Box, w=5, h=_)`.

    Args:
        statement (ast.stmt): The statement to inspect.
        registry (AnnotationRegistry): The registry holding the annotations.
        aliases (Collection[str]): Dotted names an annotation may be accessed through.

    Raises:
        MalformedAnnotation: Raised if the statement calls the retrofit form of a registered
            annotation with unexpected arguments.

    Returns:
        RetrofitUse | None: The retrofit use, or None if the statement is not one.
    """
    if not isinstance(statement, ast.Expr) or not isinstance(statement.value, ast.Call):
        return None
    call = statement.value
    func = call.func
    if not (isinstance(func, ast.Attribute) and func.attr == Markers.RETROFIT):
        return None
    annotation = resolve_reference(func.value, registry, aliases)
    if annotation is None:
        return None

    if len(call.args) == 2 and not call.keywords and isinstance(call.args[1], ast.Dict):
        table = table_from_dict(call.args[1])
    elif (
        len(call.args) == 1
        and call.keywords
        and all(k.arg is not None for k in call.keywords)
    ):
        table = [(k.arg, k.value) for k in call.keywords if k.arg is not None]
    else:
        raise MalformedAnnotation(
            "A retrofit takes a type and a field table, either as a dict literal or as"
            " keyword arguments.",
            annotation=annotation.name,
            statement=ast.unparse(statement),
        )
    return RetrofitUse(annotation, func.value, call.args[0], table)
