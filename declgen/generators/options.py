"""Options generator: configuration-options tree to interface declarations.

Every object-valued option becomes an ``...Options`` interface and every
option a property of its parent interface. The ``series`` option family is
special-cased into one interface per series type plus the discriminated
union ``SeriesOptionsType``.
"""

import re

from declgen.declarations import (
    Declaration,
    DeclarationKind,
    camel_case_options_name,
    capitalize,
    is_string_literal,
    map_type,
    map_value,
    merge_unique,
)
from declgen.doclets import DocMeta, DocNode, Doclet, parse_values
from declgen.exceptions import MissingAnchorError
from declgen.logging import get_declgen_logger
from declgen.settings import Settings, settings as default_settings
from declgen.text import extract_urls, remove_examples, remove_links

logger = get_declgen_logger(__name__)

ANY_TYPE = re.compile(r"(^|[<(|])any([|)>]|$)")
INDEXER_NAME = "[key:string]"
ROOT_INTERFACE = "Options"
SERIES_INTERFACE = "SeriesOptions"
SERIES_UNION = "SeriesOptionsType"
SERIES_TYPE_OPTION = "series.type"
PLOT_OPTIONS_PREFIX = "plotOptions"


class OptionsGenerator:
    """Generates option interfaces into a namespace module.

    ``generate`` runs three phases: interfaces and properties, series union
    wiring, and extraction of string-literal unions into named aliases.
    Alias name collisions with differing literal sets are merged, logged and
    recorded in ``collisions``.

    Example:
        >>> generator = OptionsGenerator()
        >>> namespace = generator.generate(options_tree)
        >>> namespace.get_children("Options")[0].get_children("series")[0].types
        ['Array<Highcharts.SeriesOptionsType>']
    """

    def __init__(self, namespace: Declaration | None = None, settings: Settings = default_settings) -> None:
        self._settings = settings
        self._namespace = (
            namespace if namespace is not None else Declaration(DeclarationKind.MODULE, settings.namespace_name)
        )
        self._series_types: list[str] = []
        self.collisions: list[str] = []

    @property
    def namespace(self) -> Declaration:
        return self._namespace

    @property
    def series_types(self) -> list[str]:
        """Full names of the generated series-type interfaces."""
        return list(self._series_types)

    def generate(self, root: DocNode) -> Declaration:
        """Generate all declarations of an options tree.

        Raises:
            MissingAnchorError: ``Options``, ``Options.series`` or the ``data``
                option of a series type is missing.
        """
        self._generate_interface(root)
        self._generate_series_union()
        self._generate_literal_types()
        return self._namespace

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _interface_name(self, node: DocNode) -> str:
        return camel_case_options_name(node.fullname, self._settings.namespace_name)

    def _qualified(self, name: str) -> str:
        prefix = self._namespace.full_name
        return f"{prefix}.{name}" if prefix else name

    @staticmethod
    def _is_private(node: DocNode) -> bool:
        return node.doclet is not None and node.doclet.is_private_access

    @staticmethod
    def _is_series_type(node: DocNode) -> bool:
        """Series children with their own options that inherit from plotOptions."""
        extends = (node.doclet.extends_list if node.doclet else None) or []
        return bool(node.children) and any(name.startswith(PLOT_OPTIONS_PREFIX) for name in extends)

    @staticmethod
    def _indexer(parent: DocNode) -> DocNode:
        return DocNode(
            doclet=Doclet(types=["*"]),
            meta=DocMeta(fullname=f"{parent.fullname}.{INDEXER_NAME}", name=INDEXER_NAME),
        )

    def _normalize_doclet(self, node: DocNode) -> Doclet:
        doclet = node.doclet or Doclet()
        removed_links: list[str] = []

        description = remove_examples(doclet.description.strip())
        description = remove_links(description, removed_links)
        removed_links.extend(doclet.see or [])

        types = merge_unique([map_type(type_) for type_ in doclet.types]) if doclet.types else ["any"]

        if doclet.products:
            removed_links = [
                self._settings.see_link(node.fullname, "option", product) for product in doclet.products
            ]
            if description and not description.startswith("("):
                description = f"({', '.join(capitalize(product) for product in doclet.products)}) {description}"

        see: list[str] = []
        if not self._settings.without_links:
            see = [urls[0] for link in removed_links if (urls := extract_urls(link))]

        return doclet.model_copy(update={"description": description, "types": types, "see": see})

    # ------------------------------------------------------------------
    # Interfaces and properties
    # ------------------------------------------------------------------

    def _generate_interface(self, node: DocNode) -> Declaration | None:
        if self._is_private(node):
            return None

        doclet = self._normalize_doclet(node)
        declaration = self._namespace.upsert(DeclarationKind.INTERFACE, self._interface_name(node))
        declaration.absorb(doclet.description, see=doclet.see or [])

        if declaration.name == SERIES_INTERFACE:
            self._generate_series_children(node, declaration)
        else:
            for child in node.children.values():
                self._generate_property(child, declaration)

        return declaration

    def _generate_property(self, node: DocNode, target: Declaration) -> Declaration | None:
        if self._is_private(node):
            return None

        doclet = self._normalize_doclet(node)
        types = list(doclet.types or [])

        if node.children:
            interface = self._generate_interface(node)
            if interface is None:
                return None
            replaced_any = False
            linked: list[str] = []
            for type_ in types:
                if ANY_TYPE.search(type_):
                    replaced_any = True
                    type_ = ANY_TYPE.sub(rf"\g<1>{interface.full_name}\g<2>", type_)
                linked.append(type_)
            if not replaced_any:
                linked.append(interface.full_name)
            types = merge_unique(linked)

        declaration = target.upsert(DeclarationKind.PROPERTY, node.name)
        declaration.absorb(doclet.description, see=doclet.see or [])
        declaration.is_optional = node.fullname != SERIES_TYPE_OPTION and not node.name.startswith("[")

        values = parse_values(doclet.values)
        if values is not None:
            declaration.absorb(types=[map_value(value) for value in values])
        else:
            declaration.absorb(types=types)

        return declaration

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    def _generate_series_children(self, node: DocNode, declaration: Declaration) -> None:
        children = list(node.children.values())

        for child in children:
            if not self._is_series_type(child):
                self._generate_property(child, declaration)
        self._generate_property(self._indexer(node), declaration)

        for child in children:
            if not self._is_series_type(child):
                continue
            data = child.children.get("data")
            if data is None:
                raise MissingAnchorError(f"{child.fullname}.data")
            data = data.model_copy(update={"children": {**data.children, INDEXER_NAME: self._indexer(data)}})
            series_node = child.model_copy(update={"children": {**child.children, "data": data}})

            series = self._generate_series_type(series_node)
            if series is not None:
                self._series_types.append(series.full_name)

    def _generate_series_type(self, node: DocNode) -> Declaration | None:
        if not node.meta.name or self._is_private(node):
            return None

        doclet = self._normalize_doclet(node)
        declaration = self._namespace.upsert(DeclarationKind.INTERFACE, self._interface_name(node))

        inherited = ["type"]
        for base in doclet.extends_list or []:
            base_name = camel_case_options_name(base, self._settings.namespace_name)
            base_declaration = next(
                (
                    candidate
                    for candidate in self._namespace.get_children(base_name)
                    if candidate.kind is DeclarationKind.INTERFACE
                ),
                None,
            )
            if base_declaration is None:
                logger.debug("Base options %s of %s not generated", base_name, declaration.name)
                continue
            inherited.extend(base_declaration.get_children_names())
        inherited = merge_unique(inherited)

        declaration.absorb(
            doclet.description,
            [self._qualified(f"Plot{capitalize(node.meta.name)}Options"), self._qualified(SERIES_INTERFACE)],
            doclet.see or [],
        )

        products = ", ".join(capitalize(product) for product in self._settings.products)
        type_property = declaration.upsert(DeclarationKind.PROPERTY, "type")
        type_property.absorb(
            f"({products}) This property is only in TypeScript non-optional and might be "
            "`undefined` in series objects from unknown sources.",
            [f'"{node.meta.name}"'],
        )

        for child_name, child in node.children.items():
            if child_name not in inherited:
                self._generate_property(child, declaration)

        for excluded in merge_unique(doclet.exclude or []):
            if excluded in inherited or declaration.get_children(excluded):
                continue
            declaration.add_children(
                Declaration(
                    DeclarationKind.PROPERTY,
                    excluded,
                    description="Not available",
                    types=["undefined"],
                    is_optional=True,
                )
            )

        return declaration

    def _generate_series_union(self) -> None:
        options = next(
            (
                child
                for child in self._namespace.get_children(ROOT_INTERFACE)
                if child.kind is DeclarationKind.INTERFACE
            ),
            None,
        )
        if options is None:
            raise MissingAnchorError(self._qualified(ROOT_INTERFACE))

        series = next(
            (child for child in options.get_children("series") if child.kind is DeclarationKind.PROPERTY),
            None,
        )
        if series is None:
            raise MissingAnchorError(f"{options.full_name}#series")

        union = self._namespace.upsert(DeclarationKind.TYPE, SERIES_UNION)
        union.absorb("The possible types of series options.", self._series_types)

        series.types[:] = [f"Array<{union.full_name}>"]

    # ------------------------------------------------------------------
    # Literal types
    # ------------------------------------------------------------------

    def _generate_literal_types(self) -> None:
        for declaration in list(self._namespace.walk()):
            if declaration.kind is not DeclarationKind.PROPERTY:
                continue
            types = declaration.types
            if len(types) > 1 and all(is_string_literal(type_) for type_ in types):
                alias = self._generate_type_alias(f"Options{capitalize(declaration.name)}Value", types)
                declaration.types[:] = [alias.full_name]

    def _generate_type_alias(self, name: str, types: list[str]) -> Declaration:
        existing = next(
            (child for child in self._namespace.get_children(name) if child.kind is DeclarationKind.TYPE),
            None,
        )
        if existing is not None:
            if set(existing.types) == set(types):
                return existing
            logger.warning(
                "%s already exists with different types: %s vs. %s; merging",
                name,
                "|".join(existing.types),
                "|".join(types),
            )
            self.collisions.append(name)
            existing.absorb(types=types)
            return existing

        alias = Declaration(DeclarationKind.TYPE, name, types=list(types))
        self._namespace.add_children(alias)
        return alias
