"""Channels, chains and the registry naming them."""

from .annotation import FieldAnnotation
from .channel import Channel, new_channel
from .chain import Chain, new_chain
from .registry import AnnotationRegistry, annotation_registry
from .errors import (
    ChainCompositionError,
    EmptyChain,
    DuplicateChainMember,
    DuplicateAnnotationName,
    UnknownField,
)

__all__ = [
    # Core classes
    "FieldAnnotation",
    "Channel",
    "Chain",
    "AnnotationRegistry",
    # Main API functions
    "new_channel",
    "new_chain",
    "annotation_registry",
    # Errors
    "ChainCompositionError",
    "EmptyChain",
    "DuplicateChainMember",
    "DuplicateAnnotationName",
    "UnknownField",
]
