"""declgen - TypeScript declaration generator for documented JavaScript APIs.

@public

Turns the JSON documentation trees of a JavaScript library (namespace and
options trees) into declaration trees, combines the trees of several product
variants, and renders them as ``.d.ts`` modules.

Quick Start:
    >>> from declgen import build_modules, load_namespace_trees, render_module
    >>>
    >>> modules = build_modules(load_namespace_trees("tree-namespace.json"))
    >>> print(render_module(modules["code/highcharts"]))

Environment Variables:
    - DECLGEN_NAMESPACE_NAME: Root namespace of the generated declarations
    - DECLGEN_LOG_LEVEL: Log level of the declgen loggers
"""

from .declarations import Declaration, DeclarationKind
from .doclets import DocMeta, DocNode, Doclet
from .exceptions import DeclarationError, DeclgenError, DocTreeError, GenerationError, MissingAnchorError
from .generators import NamespaceGenerator, OptionsGenerator
from .loader import load_namespace_trees, load_options_tree
from .logging import get_declgen_logger, setup_logging
from .merge import filter_child_declarations, filter_invalid_types, merge_declarations
from .products import build_modules, diff, generate, generate_options, merge, prune_invalid_types
from .render import render_module, render_source_variant
from .settings import Settings, settings

__version__ = "0.1.0"

__all__ = [
    "Declaration",
    "DeclarationError",
    "DeclarationKind",
    "DeclgenError",
    "DocMeta",
    "DocNode",
    "DocTreeError",
    "Doclet",
    "GenerationError",
    "MissingAnchorError",
    "NamespaceGenerator",
    "OptionsGenerator",
    "Settings",
    "build_modules",
    "diff",
    "filter_child_declarations",
    "filter_invalid_types",
    "generate",
    "generate_options",
    "get_declgen_logger",
    "load_namespace_trees",
    "load_options_tree",
    "merge",
    "merge_declarations",
    "prune_invalid_types",
    "render_module",
    "render_source_variant",
    "settings",
    "setup_logging",
]
