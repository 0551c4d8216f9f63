"""
fieldmetadata: Per-field metadata channels generated from annotated class declarations.

This library provides:
- Channels: named metadata categories with a default, looked up by (type, field)
- Chains: ordered compositions of channels applied as one annotation
- A code generator expanding `@channel` classes whose fields read `x: int | 5 | "cm"` into
  plain classes and accessor definitions
- Standard channels: label, units, description, bounds, ...
"""

import logging

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
]
