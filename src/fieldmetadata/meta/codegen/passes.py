"""Bookkeeping of one generation pass."""

import logging
from typing import NamedTuple

from .errors import DuplicateFieldMetadata

logger = logging.getLogger(__name__)


class TypeKey(NamedTuple):
    """Identity of a type during generation: its qualified name in the module and the number of
    class statements of that name seen before it. Two class statements always define two types,
    even with the same qualified name (one per branch of an `if` for instance)."""

    qualname: str
    generation: int = 0

    def __str__(self) -> str:
        return self.qualname


type EntryKey = tuple[TypeKey | str, str, str]


class GenerationPass:
    """Tracks the (type, field, channel) triples resolved during one generation pass, split
    between explicit values and implicit defaults.

    A triple may receive at most one explicit value per pass.
    """

    def __init__(self) -> None:
        self.explicit: list[EntryKey] = []
        self.defaulted: list[EntryKey] = []
        self.__seen: set[EntryKey] = set()
        self.__declarations: dict[str, int] = {}

    def declare(self, qualname: str) -> TypeKey:
        """Record a class statement and return the identity of the type it defines."""
        generation = self.__declarations.get(qualname, 0) + 1
        self.__declarations[qualname] = generation
        return TypeKey(qualname, generation)

    def is_declared(self, qualname: str) -> bool:
        return qualname in self.__declarations

    def current(self, qualname: str) -> TypeKey:
        """Identity of the type a name currently refers to: the latest class statement of that
        name, or a type declared outside the generated source."""
        return TypeKey(qualname, self.__declarations.get(qualname, 0))

    def record_value(self, type_key: TypeKey | str, field: str, channel: str) -> None:
        """Record an explicit value.

        Raises:
            DuplicateFieldMetadata: Raised if the triple already received a value in this pass.
        """
        key = (type_key, field, channel)
        if key in self.__seen:
            raise DuplicateFieldMetadata(
                f"Field '{field}' of '{type_key}' already has a '{channel}' value.",
                type_name=str(type_key),
                field=field,
                channel=channel,
            )
        self.__seen.add(key)
        self.explicit.append(key)
        logger.debug("%s.%s: explicit '%s' value", type_key, field, channel)

    def record_default(self, type_key: TypeKey | str, field: str, channel: str) -> None:
        """Record a triple left to the channel default."""
        self.defaulted.append((type_key, field, channel))

    def has_value(self, type_key: TypeKey | str, field: str, channel: str) -> bool:
        return (type_key, field, channel) in self.__seen
