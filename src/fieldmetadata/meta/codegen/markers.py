"""Syntactic markers recognized in annotated sources."""

from ..classes.constants import ConstantNamespace


class Markers(ConstantNamespace):
    """Names the code generator gives a meaning to.

    USE_DEFAULT: bare name consuming a metadata layer without registering a value.
    REGISTER: method of a channel called by the emitted accessor definitions.
    REGISTER_TYPE: method of a channel marking a type it was applied to without any value.
    UPDATE: attribute of an annotation marking an update decorator (`@size.update`).
    RETROFIT: method of an annotation marking a retrofit statement (`size.retrofit(...)`).
    """

    USE_DEFAULT: str = "_"
    REGISTER: str = "register"
    REGISTER_TYPE: str = "register_type"
    UPDATE: str = "update"
    RETROFIT: str = "retrofit"
