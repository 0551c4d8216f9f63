"""Registry of the annotations known to the code generator, by name."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from .errors import DuplicateAnnotationName

if TYPE_CHECKING:
    from .annotation import FieldAnnotation

logger = logging.getLogger(__name__)


class AnnotationRegistry:
    """
    A class to hold the channels and chains that decorators and retrofit statements may name.
    Holding several registries gives independent metadata universes.
    """

    __by_name: dict[str, FieldAnnotation]

    def __init__(self) -> None:
        self.__by_name = {}

    def register[A: FieldAnnotation](self, annotation: A) -> A:
        """Register an annotation under its name.

        Args:
            annotation (FieldAnnotation): The channel or chain to register.

        Raises:
            DuplicateAnnotationName: Raised if another annotation already uses the name.

        Returns:
            FieldAnnotation: The registered annotation.
        """
        existing = self.__by_name.get(annotation.name)
        if existing is not None and existing is not annotation:
            raise DuplicateAnnotationName(
                f"An annotation named '{annotation.name}' is already registered.",
                name=annotation.name,
            )
        self.__by_name[annotation.name] = annotation
        logger.debug("Registered annotation %r", annotation)
        return annotation

    def get(self, name: str) -> FieldAnnotation | None:
        """Get the annotation registered under a name, or None."""
        return self.__by_name.get(name)

    def has_annotation(self, name: str) -> bool:
        return name in self.__by_name

    def list_registered_names(self) -> list[str]:
        """Get all registered names for debugging/introspection."""
        return list(self.__by_name)

    def __contains__(self, name: str) -> bool:
        return name in self.__by_name

    def __len__(self) -> int:
        return len(self.__by_name)


@lru_cache(1)
def annotation_registry() -> AnnotationRegistry:
    """Default annotation registry, used when no registry is given.

    Returns:
        AnnotationRegistry: the registry instance.
    """
    return AnnotationRegistry()
