"""Base error of the fieldmetadata package."""

from ..abstract.exceptions.traced_exceptions import TracedException


class FieldMetadataError(TracedException):
    """General error for field metadata generation and lookup."""
