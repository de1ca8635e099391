"""Generators turning documentation trees into declaration trees."""

from .namespace import NamespaceGenerator, split_overload
from .options import OptionsGenerator

__all__ = [
    "NamespaceGenerator",
    "OptionsGenerator",
    "split_overload",
]
