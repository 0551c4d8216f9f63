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
Description: Peeling of pipe-delimited metadata chains. A field annotated
             `x: float | "X" | "cm"` has the base type `float` and the chain `"X" | "cm"`.
             Each channel application peels the first value of the chain and leaves the
             remainder in the annotation for the next one.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ast
from collections.abc import Sequence
from functools import reduce
from typing import Final

from .markers import Markers


class Absent:
    """Type of the ABSENT sentinel: no metadata value was supplied for a field."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = Absent()

type MetadataChain = ast.expr | None
type Peeled = ast.expr | Absent


def chain_values(chain: MetadataChain) -> list[ast.expr]:
    """Flatten a `|` chain into its values, in declaration order.

    `|` associates to the left, so only the left operands are walked: a `|` expression found as
    a right operand was parenthesized in the source and is a single value, e.g. `(R | W)` in
    `1 | (R | W)`.

    Args:
        chain (ast.expr | None): The chain to flatten. None is the empty chain.

    Returns:
        list[ast.expr]: The values of the chain, left to right.
    """
    if chain is None:
        return []
    if isinstance(chain, ast.BinOp) and isinstance(chain.op, ast.BitOr):
        return chain_values(chain.left) + [chain.right]
    return [chain]


def build_chain(values: Sequence[ast.expr]) -> MetadataChain:
    """Build a `|` chain from values. The inverse of chain_values, except for a first value that
    is itself a `|` expression, which reads back as several values."""
    if not values:
        return None
    return reduce(lambda left, right: ast.BinOp(left, ast.BitOr(), right), values)


def is_use_default(value: Peeled) -> bool:
    """Check if a peeled value is the marker deferring to the channel default (`_`)."""
    return isinstance(value, ast.Name) and value.id == Markers.USE_DEFAULT


def peel(chain: MetadataChain) -> tuple[Peeled, MetadataChain]:
    """Peel the outermost value of a metadata chain.

    Peeling the remainder again yields the next value, so repeated peeling reproduces the
    declaration order.

        >>> value, rest = peel(ast.parse('"X" | "cm" | 3', mode="eval").body)
        >>> ast.unparse(value), ast.unparse(rest)
        ("'X'", "'cm' | 3")

    Args:
        chain (ast.expr | None): The chain to peel. A bare value is a chain of one value.

    Returns:
        tuple[ast.expr | Absent, ast.expr | None]: The outermost value, or ABSENT if the chain is
            empty, and the remaining chain, or None if nothing remains.
    """
    values = chain_values(chain)
    if not values:
        return ABSENT, None
    return values[0], build_chain(values[1:])


def split_annotation(annotation: ast.expr | None) -> tuple[ast.expr | None, MetadataChain]:
    """Split a field annotation into its base type and its metadata chain."""
    values = chain_values(annotation)
    if not values:
        return None, None
    return values[0], build_chain(values[1:])


def join_annotation(base: ast.expr | None, chain: MetadataChain) -> ast.expr | None:
    """Rebuild a field annotation from its base type and a metadata chain."""
    if base is None:
        return chain
    return build_chain([base, *chain_values(chain)])


def peel_annotation(annotation: ast.expr) -> tuple[Peeled, ast.expr]:
    """Peel the first metadata value of a field annotation.

    Args:
        annotation (ast.expr): The annotation, e.g. `int | 5 | "cm"`.

    Returns:
        tuple[ast.expr | Absent, ast.expr]: The peeled value (ABSENT for a bare base type) and
            the annotation with that layer stripped, e.g. `int | "cm"`.
    """
    # values after the base stay right operands, so parenthesized ones are kept whole.
    base, *values = chain_values(annotation)
    if not values:
        return ABSENT, annotation
    return values[0], build_chain([base, *values[1:]])


def metadata_depth(annotation: ast.expr | None) -> int:
    """Number of metadata values still carried by a field annotation."""
    return max(len(chain_values(annotation)) - 1, 0)
