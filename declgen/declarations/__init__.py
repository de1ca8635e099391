"""Declaration object model and type-expression helpers."""

from .model import CALLABLE_KINDS, INTERFACE_KINDS, MODULE_KINDS, Declaration, DeclarationKind
from .types import (
    TYPE_SEPARATOR,
    camel_case_options_name,
    capitalize,
    extract_type_names,
    is_string_literal,
    map_type,
    map_value,
    merge_unique,
    namespaces,
    replace_type_name,
)

__all__ = [
    "CALLABLE_KINDS",
    "INTERFACE_KINDS",
    "MODULE_KINDS",
    "TYPE_SEPARATOR",
    "Declaration",
    "DeclarationKind",
    "camel_case_options_name",
    "capitalize",
    "extract_type_names",
    "is_string_literal",
    "map_type",
    "map_value",
    "merge_unique",
    "namespaces",
    "replace_type_name",
]
