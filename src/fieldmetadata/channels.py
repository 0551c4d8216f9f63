"""
Re-export channels module for cleaner imports.

This allows: from fieldmetadata.channels import new_channel
Instead of: from fieldmetadata.meta.channels.channel import new_channel
"""

from .meta.channels import (
    FieldAnnotation,
    Channel,
    Chain,
    AnnotationRegistry,
    new_channel,
    new_chain,
    annotation_registry,
)
from .meta.typing.utilities import FieldKey, field_names

__all__ = [
    "FieldAnnotation",
    "Channel",
    "Chain",
    "AnnotationRegistry",
    "FieldKey",
    "new_channel",
    "new_chain",
    "annotation_registry",
    "field_names",
]
