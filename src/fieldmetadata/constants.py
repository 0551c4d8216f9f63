"""
Immutable settings namespaces. The source markers recognized by the code generator
(fieldmetadata.codegen.Markers) are declared with them.

    from fieldmetadata.constants import ConstantNamespace

    class Units(ConstantNamespace):
        LENGTH: str = "m"
"""

from .meta.classes.constants import (
    ConstantNamespace,
    ConstantsMetaclass,
    ConstantsCompositionError,
    ConstantsInstantiationError,
    ConstantsModificationError,
)

__all__ = [
    "ConstantNamespace",
    "ConstantsMetaclass",
    "ConstantsCompositionError",
    "ConstantsInstantiationError",
    "ConstantsModificationError",
]
