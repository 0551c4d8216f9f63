"""
Re-export code generation module for cleaner imports.

This allows: from fieldmetadata.codegen import render
Instead of: from fieldmetadata.meta.codegen.generation import render
"""

from .meta.codegen import (
    ABSENT,
    Declaration,
    GenerationPass,
    TypeKey,
    Markers,
    peel,
    peel_annotation,
    is_use_default,
    locate,
    dispatch_key,
    emit,
    emit_type,
    import_aliases,
)
from .meta.codegen.generation import AnnotationExpander, generate, render

__all__ = [
    # Main API functions
    "generate",
    "render",
    # Pipeline stages
    "peel",
    "peel_annotation",
    "is_use_default",
    "locate",
    "dispatch_key",
    "emit",
    "emit_type",
    "import_aliases",
    # Supporting types
    "ABSENT",
    "AnnotationExpander",
    "Declaration",
    "GenerationPass",
    "TypeKey",
    "Markers",
]
