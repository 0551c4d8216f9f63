"""Errors raised while building channels and chains, or looking values up."""

from ..errors import FieldMetadataError


class ChainCompositionError(FieldMetadataError):
    """Signals an invalid list of members for a chain."""


class EmptyChain(ChainCompositionError):
    """Signals a chain composed of zero channels."""


class DuplicateChainMember(ChainCompositionError):
    """Signals a chain listing the same channel twice."""


class DuplicateAnnotationName(FieldMetadataError):
    """Signals a registry name already taken by another annotation."""


class UnknownField(FieldMetadataError):
    """Signals a field key that is not a field of the looked up type."""
