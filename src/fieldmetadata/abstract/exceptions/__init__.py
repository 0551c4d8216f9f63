"""Exception utilities for fieldmetadata."""

from .traced_exceptions import TracedException, format_exception, format_context

__all__ = [
    "TracedException",
    "format_exception",
    "format_context",
]
