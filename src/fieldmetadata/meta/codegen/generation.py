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
Description: Expansion of a whole module: every class decorated with registered annotations
             and every retrofit statement is replaced by its generated code, in one pass.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ast
import copy
import logging
from collections.abc import Collection
from typing import Any

from .locator import annotation_uses, import_aliases, parse_source, retrofit_use
from .passes import GenerationPass, TypeKey
from ..channels.annotation import Member, consume_fields, consume_table, warn_unconsumed
from ..channels.registry import AnnotationRegistry, annotation_registry

logger = logging.getLogger(__name__)


class AnnotationExpander(ast.NodeTransformer):
    """Replaces annotated classes and retrofit statements by their generated code.

    All the expansions of one visit share the same generation pass, so a (type, field,
    channel) triple receives at most one value per module. Types are told apart by their
    qualified name and by the class statement defining them: `A.Inner` and `B.Inner` are two
    types, and so are two `Box` declared in the branches of an `if`.
    """

    def __init__(
        self,
        registry: AnnotationRegistry,
        generation_pass: GenerationPass | None = None,
        aliases: Collection[str] = frozenset(),
    ) -> None:
        self.registry = registry
        self.generation_pass = generation_pass or GenerationPass()
        self.aliases = aliases
        self.__scope: list[str] = []

    def _qualname(self, name: str) -> str:
        return ".".join([*self.__scope, name])

    def _retrofit_key(self, type_ref: ast.expr) -> TypeKey:
        name = ast.unparse(type_ref)
        for depth in range(len(self.__scope), 0, -1):
            qualname = ".".join([*self.__scope[:depth], name])
            if self.generation_pass.is_declared(qualname):
                return self.generation_pass.current(qualname)
        return self.generation_pass.current(name)

    def _visit_scope(self, node: ast.AST, *names: str) -> Any:
        self.__scope.extend(names)
        try:
            return self.generic_visit(node)
        finally:
            del self.__scope[-len(names) :]

    def visit_FunctionDef(self, node: ast.FunctionDef) -> Any:
        return self._visit_scope(node, node.name, "<locals>")

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> Any:
        return self._visit_scope(node, node.name, "<locals>")

    def visit_ClassDef(self, node: ast.ClassDef) -> Any:
        # nested classes first.
        self._visit_scope(node, node.name)
        qualname = self._qualname(node.name)
        uses, others = annotation_uses(node, self.registry, self.aliases)
        if uses and all(use.update for use in uses):
            type_key = self.generation_pass.current(qualname)
        else:
            type_key = self.generation_pass.declare(qualname)
        if not uses:
            return node

        members: list[Member] = []
        for use in uses:
            members.extend(use.annotation.members(use.reference))
        node.decorator_list = others
        accessors = consume_fields(node, members, self.generation_pass, type_key)
        warn_unconsumed(node)
        logger.debug(
            "Expanded %s with [%s]: %d accessor(s)",
            qualname,
            ", ".join(use.annotation.name for use in uses),
            len(accessors),
        )

        if all(use.update for use in uses):
            return accessors
        return [node, *accessors]

    def visit_Expr(self, node: ast.Expr) -> Any:
        use = retrofit_use(node, self.registry, self.aliases)
        if use is None:
            return self.generic_visit(node)
        accessors = consume_table(
            use.type_ref,
            use.table,
            use.annotation.members(use.reference),
            self.generation_pass,
            self._retrofit_key(use.type_ref),
        )
        logger.debug(
            "Retrofitted %s on %s: %d accessor(s)",
            use.annotation.name,
            ast.unparse(use.type_ref),
            len(accessors),
        )
        return accessors


def generate(
    source: str | ast.AST,
    registry: AnnotationRegistry | None = None,
    aliases: Collection[str] = (),
) -> ast.Module:
    """Expand all the annotations of a module.

    The input is left untouched. Statements that use no registered annotation are kept as is.
    A decorator such as `@meta.size` names an annotation only when `meta` is bound by an import
    of the module or listed in `aliases`.

    Args:
        source (str | ast.AST): Source text or module tree.
        registry (AnnotationRegistry | None): Registry resolving annotation names. Defaults to
            annotation_registry().
        aliases (Collection[str]): Dotted names, besides the imported ones, through which
            annotations may be accessed.

    Raises:
        SyntaxError: Raised if the source text does not parse.
        DuplicateFieldMetadata: Raised if a (type, field, channel) triple receives two values.
        MalformedAnnotation: Raised if a retrofit statement has unexpected arguments.

    Returns:
        ast.Module: The generated module.
    """
    tree = copy.deepcopy(parse_source(source))
    if not isinstance(tree, ast.Module):
        tree = ast.Module(body=[tree], type_ignores=[])
    expander = AnnotationExpander(
        registry if registry is not None else annotation_registry(),
        aliases=import_aliases(tree) | set(aliases),
    )
    module = expander.visit(tree)
    return ast.fix_missing_locations(module)


def render(
    source: str | ast.AST,
    registry: AnnotationRegistry | None = None,
    aliases: Collection[str] = (),
) -> str:
    """Expand all the annotations of a module and return the generated source text."""
    return ast.unparse(generate(source, registry, aliases))
