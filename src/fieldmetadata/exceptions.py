"""
Re-export exceptions for cleaner imports.

This allows: from fieldmetadata.exceptions import UnknownField
Instead of: from fieldmetadata.meta.channels.errors import UnknownField
"""

from .abstract.exceptions.traced_exceptions import TracedException, format_exception
from .meta.errors import FieldMetadataError
from .meta.codegen.errors import (
    NoDeclarationFound,
    MalformedAnnotation,
    DuplicateFieldMetadata,
)
from .meta.channels.errors import (
    ChainCompositionError,
    EmptyChain,
    DuplicateChainMember,
    DuplicateAnnotationName,
    UnknownField,
)

__all__ = [
    "TracedException",
    "format_exception",
    "FieldMetadataError",
    "NoDeclarationFound",
    "MalformedAnnotation",
    "DuplicateFieldMetadata",
    "ChainCompositionError",
    "EmptyChain",
    "DuplicateChainMember",
    "DuplicateAnnotationName",
    "UnknownField",
]
