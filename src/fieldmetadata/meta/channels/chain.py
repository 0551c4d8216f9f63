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
Description: Chains: ordered compositions of channels applied as one annotation.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ast
import copy
from collections.abc import Iterable, Iterator

from .annotation import FieldAnnotation, Member
from .channel import Channel
from .errors import EmptyChain, DuplicateChainMember
from .registry import AnnotationRegistry, annotation_registry


class Chain(FieldAnnotation):
    """A fixed, ordered composition of channels exposed as one annotation. Applied once to a
    class, the first channel consumes the first metadata value of each field, the second
    channel the second one, and so on. The class is emitted once.

    Examples:
        >>> label = new_channel("label", "")
        >>> unit = new_channel("unit", "m")
        >>> geo = new_chain("geo", [label, unit])
        >>> print(render('''
        ... @geo
        ... class Point:
        ...     x: float | "X" | "cm"
        ... '''))
        class Point:
            x: float
        geo['label'].register(Point, 'x', 'X')
        geo['unit'].register(Point, 'x', 'cm')
    """

    __channels: tuple[Channel, ...]

    def __init__(self, name: str, members: Iterable[FieldAnnotation]) -> None:
        channels: list[Channel] = []
        for member in members:
            for channel in member.channels:
                if any(c.name == channel.name for c in channels):
                    raise DuplicateChainMember(
                        f"Chain '{name}' lists the channel '{channel.name}' more than once.",
                        chain=name,
                        channel=channel.name,
                    )
                channels.append(channel)
        if not channels:
            raise EmptyChain(f"Chain '{name}' has no channel.", chain=name)
        self.name = name
        self.__channels = tuple(channels)

    def __repr__(self) -> str:
        return f"<Chain {self.name} [{', '.join(c.name for c in self.__channels)}]>"

    @property
    def channels(self) -> tuple[Channel, ...]:
        return self.__channels

    def members(self, reference: ast.expr | None = None) -> list[Member]:
        """Members are named in emitted code by subscripting the chain: `geo["label"]`."""
        reference = reference if reference is not None else self.reference()
        return [
            (
                channel,
                ast.Subscript(
                    value=copy.deepcopy(reference), slice=ast.Constant(channel.name), ctx=ast.Load()
                ),
            )
            for channel in self.__channels
        ]

    def __getitem__(self, name: str) -> Channel:
        for channel in self.__channels:
            if channel.name == name:
                return channel
        raise KeyError(f"Chain '{self.name}' has no channel '{name}'.")

    def __iter__(self) -> Iterator[Channel]:
        return iter(self.__channels)

    def __len__(self) -> int:
        return len(self.__channels)


def new_chain(
    name: str,
    members: Iterable[FieldAnnotation | str],
    registry: AnnotationRegistry | None = None,
) -> Chain:
    """Compose channels, chains or registered names into a chain and register it.

    Args:
        name (str): The chain name, unique in the registry.
        members (Iterable[FieldAnnotation | str]): The members, in consumption order. Chains
            are flattened into their channels.
        registry (AnnotationRegistry | None): Defaults to annotation_registry().

    Raises:
        EmptyChain: Raised if the chain has no channel.
        DuplicateChainMember: Raised if a channel is listed more than once.
        KeyError: Raised if a member name is not registered.
        DuplicateAnnotationName: Raised if the name is already registered.

    Returns:
        Chain: The chain.
    """
    registry = registry if registry is not None else annotation_registry()
    resolved: list[FieldAnnotation] = []
    for member in members:
        if isinstance(member, str):
            annotation = registry.get(member)
            if annotation is None:
                raise KeyError(f"No annotation named '{member}' is registered.")
            member = annotation
        resolved.append(member)
    return registry.register(Chain(name, resolved))
