"""Code generation primitives: peeling, locating and emitting."""

from .errors import NoDeclarationFound, MalformedAnnotation, DuplicateFieldMetadata
from .markers import Markers
from .peeler import ABSENT, Absent, peel, peel_annotation, is_use_default
from .locator import (
    Declaration,
    locate,
    iter_fields,
    annotation_uses,
    retrofit_use,
    import_aliases,
)
from .emitter import dispatch_key, emit, emit_type
from .passes import GenerationPass, TypeKey

__all__ = [
    # Errors
    "NoDeclarationFound",
    "MalformedAnnotation",
    "DuplicateFieldMetadata",
    # Markers
    "Markers",
    # Peeling
    "ABSENT",
    "Absent",
    "peel",
    "peel_annotation",
    "is_use_default",
    # Locating
    "Declaration",
    "locate",
    "iter_fields",
    "annotation_uses",
    "retrofit_use",
    "import_aliases",
    # Emitting
    "dispatch_key",
    "emit",
    "emit_type",
    "GenerationPass",
    "TypeKey",
]
