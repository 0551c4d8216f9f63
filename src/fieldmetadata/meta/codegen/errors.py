"""Errors raised while expanding annotated declarations."""

from ..errors import FieldMetadataError


class NoDeclarationFound(FieldMetadataError):
    """Signals that no class declaration could be located in an annotated expression."""


class MalformedAnnotation(FieldMetadataError):
    """Signals an annotation invocation that does not have the expected shape."""


class DuplicateFieldMetadata(FieldMetadataError):
    """Signals a second accessor entry for the same (type, field, channel) key."""
