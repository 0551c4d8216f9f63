"""Emission of accessor definitions.

An accessor definition is a statement registering one value for one (type, field) pair on one
channel: `size.register(Box, "w", 5)`. Each definition adds a single key to the channel entries,
so definitions for distinct fields never interfere with one another.
"""
import ast
import copy
from typing import Any

from .markers import Markers
from ..typing.utilities import FieldKey, field_name_of

type DispatchKey = tuple[Any, str]


def dispatch_key(owner: Any, key: str | FieldKey) -> DispatchKey:
    """Key of an accessor entry: the type identity and the field name.

    Args:
        owner (Any): The type, or the name of the type at generation time.
        key (str | FieldKey): The field.

    Raises:
        TypeError: Raised if the key does not designate a field.

    Returns:
        tuple[Any, str]: The dispatch key.
    """
    name = field_name_of(key)
    if name is None:
        raise TypeError(f"Field key must be a str or a FieldKey, got {key!r}.")
    return owner, name


def as_expr(ref: ast.expr | str) -> ast.expr:
    """Accept a dotted name where an expression is expected. Expressions are copied so a
    reference shared by several definitions stays a tree."""
    if isinstance(ref, str):
        return ast.parse(ref, mode="eval").body
    return copy.deepcopy(ref)


def emit(
    type_ref: ast.expr | str,
    field: str | FieldKey,
    channel_ref: ast.expr | str,
    value: ast.expr,
) -> ast.stmt:
    """Emit the accessor definition of one (type, field, channel) triple.

    Args:
        type_ref (ast.expr | str): Expression naming the type, e.g. `Box`.
        field (str | FieldKey): The field.
        channel_ref (ast.expr | str): Expression naming the channel, e.g. `size`.
        value (ast.expr): The value expression.

    Returns:
        ast.stmt: The statement `<channel>.register(<type>, "<field>", <value>)`.
    """
    _, name = dispatch_key(type_ref, field)
    call = ast.Call(
        func=ast.Attribute(value=as_expr(channel_ref), attr=Markers.REGISTER, ctx=ast.Load()),
        args=[as_expr(type_ref), ast.Constant(name), value],
        keywords=[],
    )
    return ast.Expr(call)


def emit_type(type_ref: ast.expr | str, channel_ref: ast.expr | str) -> ast.stmt:
    """Emit the statement marking a type as annotated by a channel that gave none of its fields
    an explicit value: `<channel>.register_type(<type>)`."""
    call = ast.Call(
        func=ast.Attribute(
            value=as_expr(channel_ref), attr=Markers.REGISTER_TYPE, ctx=ast.Load()
        ),
        args=[as_expr(type_ref)],
        keywords=[],
    )
    return ast.Expr(call)
