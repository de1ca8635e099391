"""Namespace generator: API documentation tree to declaration tree.

One generator instance handles one product variant. It writes into its own
namespace module and into a globals module that may be shared with other
instances; every pass runs to completion before the next one starts.
"""

from declgen.declarations import Declaration, DeclarationKind, capitalize, map_type, map_value, namespaces
from declgen.doclets import DocEvent, DocNode, DocParameter, Doclet, parse_values
from declgen.logging import get_declgen_logger
from declgen.settings import Settings, settings as default_settings
from declgen.text import extract_urls, remove_examples, remove_links

logger = get_declgen_logger(__name__)

SCOPE_MARKER = ":"
EXTERNAL_NAMESPACE = "external:"
CONSTRUCTOR_NAME = "constructor"


def split_overload(declaration: Declaration) -> Declaration | None:
    """Split a signature whose optional first parameter precedes a required one.

    The declaration keeps all parameters with the first one made required.
    The returned overload is a clone without the first parameter, for call
    sites that omit the leading argument. Returns None when the rule does
    not apply.
    """
    parameters = declaration.get_parameters()
    if len(parameters) < 2:
        return None
    first, second = parameters[0], parameters[1]
    if not first.is_optional or second.is_optional or second.is_variable:
        return None

    overload = declaration.clone()
    overload.set_parameters(*(parameter.clone() for parameter in parameters[1:]))
    first.is_optional = False
    return overload


class NamespaceGenerator:
    """Walks a documentation tree and populates declaration modules.

    Generated declarations that already exist in the target scope (same name
    and kind) are reused and enriched instead of duplicated, so several doc
    trees can be generated into the same namespace.

    Example:
        >>> globals_module = Declaration(DeclarationKind.MODULE)
        >>> namespace = Declaration(DeclarationKind.MODULE, "Highcharts")
        >>> generator = NamespaceGenerator(globals_module, namespace, "highcharts")
        >>> generator.generate(doc_tree)
    """

    def __init__(
        self,
        globals_module: Declaration,
        namespace: Declaration,
        product: str = "",
        settings: Settings = default_settings,
    ) -> None:
        self._globals = globals_module
        self._namespace = namespace
        self._product = product
        self._settings = settings

    @property
    def globals(self) -> Declaration:
        return self._globals

    @property
    def namespace(self) -> Declaration:
        return self._namespace

    @property
    def product(self) -> str:
        return self._product

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def generate(self, node: DocNode, target: Declaration | None = None) -> Declaration | None:  # noqa: C901, PLR0911
        """Generate the declarations of a doc node into the target scope.

        Returns the declaration the node produced or was folded into, or
        None when the node was skipped.
        """
        if target is None:
            target = self._namespace

        doclet = node.doclet
        kind = doclet.kind if doclet is not None else "global"

        if self._product and doclet is not None and doclet.products and self._product not in doclet.products:
            return None

        match kind:
            case "class":
                return self._generate_interface_like(node, target, DeclarationKind.CLASS)
            case "interface":
                return self._generate_interface_like(node, target, DeclarationKind.INTERFACE)
            case "constructor":
                return self._generate_callable(node, target, DeclarationKind.CONSTRUCTOR)
            case "function":
                return self._generate_callable(node, target, DeclarationKind.FUNCTION)
            case "member":
                return self._generate_property(node, target)
            case "namespace":
                return self._generate_namespace(node, target)
            case "typedef":
                return self._generate_typedef(node, target)
            case "global":
                return self._generate_global(node)
            case "external":
                return self._generate_external(node)
            case _:
                logger.error("Unknown kind: %s (%s)", kind, node.fullname or (doclet.name if doclet else ""))
                return None

    def _generate_children(self, node: DocNode, target: Declaration) -> None:
        for child in node.children.values():
            self.generate(child, target)

    def _scope(self, doclet: Doclet, target: Declaration, hoist: bool) -> Declaration:
        """Resolve where a declaration goes.

        Global doclets go to the globals module. Hoisted kinds (types,
        classes, interfaces) never nest inside another declaration; they go
        to the closest enclosing module.
        """
        if doclet.is_global:
            return self._globals
        if hoist:
            return target.closest(DeclarationKind.MODULE) or self._namespace
        return target

    # ------------------------------------------------------------------
    # Doclet normalization
    # ------------------------------------------------------------------

    def _normalize_doclet(self, node: DocNode) -> Doclet:
        """Copy of the node's doclet cleaned up for declaration output."""
        doclet = node.doclet or Doclet(kind="global")
        path = namespaces(doclet.name)
        name = path[-1] if path else ""
        removed_links: list[str] = []

        description = remove_examples(doclet.description.strip())
        description = remove_links(description, removed_links)
        if doclet.products and description and not description.startswith("("):
            description = f"({', '.join(capitalize(product) for product in doclet.products)}) {description}"

        parameters = None
        if doclet.parameters:
            parameters = {
                parameter_name: parameter.model_copy(
                    update={
                        "description": remove_links(parameter.description, removed_links),
                        "types": [map_type(type_) for type_ in parameter.types or ["any"]],
                    }
                )
                for parameter_name, parameter in doclet.parameters.items()
            }

        returns = None
        if doclet.returns:
            returns = doclet.returns.model_copy(
                update={
                    "description": remove_links(doclet.returns.description, removed_links),
                    "types": [map_type(type_) for type_ in doclet.returns.types or ["any"]],
                }
            )

        removed_links.extend(doclet.see or [])

        is_optional = doclet.is_optional
        values = parse_values(doclet.values)
        if values is not None:
            types = [map_value(value) for value in values]
        elif doclet.types:
            types = [map_type(type_) for type_ in doclet.types]
            if not name.startswith("[") and len(types) > 1 and "undefined" in types:
                is_optional = True
                types = [type_ for type_ in types if type_ != "undefined"]
        else:
            types = ["any"]

        see: list[str] = []
        if not self._settings.without_links and any(extract_urls(link) for link in removed_links):
            see = [self._settings.see_link(".".join(path), doclet.kind)]

        return doclet.model_copy(
            update={
                "name": name,
                "description": description,
                "parameters": parameters,
                "returns": returns,
                "types": types,
                "is_optional": is_optional,
                "see": see,
            }
        )

    # ------------------------------------------------------------------
    # Kinds
    # ------------------------------------------------------------------

    def _generate_interface_like(self, node: DocNode, target: Declaration, kind: DeclarationKind) -> Declaration:
        doclet = self._normalize_doclet(node)
        scope = self._scope(doclet, target, hoist=True)
        declaration = scope.upsert(kind, doclet.name)
        # lowercase types (object, any) carry no base type to extend
        declaration.absorb(
            doclet.description,
            [type_ for type_ in doclet.types or [] if type_ != type_.lower()],
            doclet.see or [],
        )
        self._generate_children(node, declaration)
        return declaration

    def _generate_callable(self, node: DocNode, target: Declaration, kind: DeclarationKind) -> Declaration:
        doclet = self._normalize_doclet(node)
        scope = self._scope(doclet, target, hoist=False)
        name = CONSTRUCTOR_NAME if kind is DeclarationKind.CONSTRUCTOR else doclet.name

        declaration = Declaration(
            kind,
            name,
            is_private=doclet.is_private,
            is_static=doclet.is_static and kind is DeclarationKind.FUNCTION,
        )
        declaration.absorb(
            doclet.description or self._sibling_description(scope, declaration),
            see=doclet.see or [],
        )

        if doclet.returns and kind is DeclarationKind.FUNCTION:
            declaration.types_description = doclet.returns.description
            declaration.absorb(types=doclet.returns.types or [])
        if doclet.events:
            declaration.add_children(*self._generate_events(doclet.events))
        if doclet.fires:
            declaration.events.extend(doclet.fires)
        if doclet.parameters:
            declaration.set_parameters(*self._generate_parameters(doclet.parameters))

        overload = split_overload(declaration)
        scope.add_children(declaration)
        if overload is not None:
            scope.add_children(overload)
        return declaration

    @staticmethod
    def _sibling_description(scope: Declaration, declaration: Declaration) -> str:
        """Description of an already generated signature of the same shape."""
        for sibling in scope.get_children(declaration.name):
            if sibling.kind is declaration.kind and sibling.description and sibling.is_static == declaration.is_static:
                return sibling.description
        return ""

    def _generate_typedef(self, node: DocNode, target: Declaration) -> Declaration:
        doclet = node.doclet or Doclet()
        if doclet.parameters or doclet.returns:
            if node.children:
                return self._generate_function_interface(node, target)
            return self._generate_function_type(node, target)
        if node.children and doclet.types and doclet.types[0] != "*":
            return self._generate_interface_like(node, target, DeclarationKind.INTERFACE)
        return self._generate_type(node, target)

    def _generate_function_interface(self, node: DocNode, target: Declaration) -> Declaration:
        """Interface with a call signature and members, for callable objects."""
        doclet = self._normalize_doclet(node)
        scope = self._scope(doclet, target, hoist=True)
        declaration = scope.upsert(DeclarationKind.INTERFACE, doclet.name)
        declaration.absorb(doclet.description, see=doclet.see or [])

        signature = declaration.upsert(DeclarationKind.FUNCTION, "")
        signature.absorb(doclet.description)
        if doclet.returns:
            signature.types_description = signature.types_description or doclet.returns.description
            signature.absorb(types=doclet.returns.types or [])
        if doclet.parameters and not signature.has_parameters:
            signature.set_parameters(*self._generate_parameters(doclet.parameters))
            overload = split_overload(signature)
            if overload is not None:
                declaration.add_children(overload)

        self._generate_children(node, declaration)
        return declaration

    def _generate_function_type(self, node: DocNode, target: Declaration) -> Declaration:
        doclet = self._normalize_doclet(node)
        scope = self._scope(doclet, target, hoist=True)
        declaration = scope.upsert(DeclarationKind.FUNCTION_TYPE, doclet.name)
        declaration.absorb(doclet.description, see=doclet.see or [])

        if doclet.parameters and not declaration.has_parameters:
            declaration.set_parameters(*self._generate_parameters(doclet.parameters))
        if doclet.returns:
            declaration.types_description = declaration.types_description or doclet.returns.description
            declaration.absorb(types=doclet.returns.types or [])
        return declaration

    def _generate_type(self, node: DocNode, target: Declaration) -> Declaration:
        doclet = self._normalize_doclet(node)
        scope = self._scope(doclet, target, hoist=True)
        declaration = scope.upsert(DeclarationKind.TYPE, doclet.name)
        types = doclet.types or []
        if node.children:
            types = [type_ for type_ in types if type_ != type_.lower()]
        declaration.absorb(doclet.description, types, doclet.see or [])
        self._generate_children(node, declaration)
        return declaration

    def _generate_property(self, node: DocNode, target: Declaration) -> Declaration:
        doclet = self._normalize_doclet(node)
        scope = self._scope(doclet, target, hoist=False)
        declaration = scope.upsert(DeclarationKind.PROPERTY, doclet.name)
        declaration.absorb(doclet.description, doclet.types or [], doclet.see or [])
        declaration.is_optional = declaration.is_optional or doclet.is_optional
        declaration.is_private = declaration.is_private or doclet.is_private
        declaration.is_static = declaration.is_static or doclet.is_static
        return declaration

    def _generate_namespace(self, node: DocNode, target: Declaration) -> Declaration:
        doclet = self._normalize_doclet(node)

        # only scope-marked names open a sub namespace
        if not doclet.name.endswith(SCOPE_MARKER):
            self._generate_children(node, self._namespace)
            return self._namespace

        scope = self._scope(doclet, target, hoist=False)
        declaration = scope.upsert(DeclarationKind.NAMESPACE, doclet.name)
        declaration.absorb(doclet.description, see=doclet.see or [])
        self._generate_children(node, declaration)
        return declaration

    def _generate_global(self, node: DocNode) -> Declaration:
        doclet = self._normalize_doclet(node)
        self._namespace.absorb(doclet.description, see=doclet.see or [])
        self._generate_children(node, self._namespace)
        return self._namespace

    def _generate_external(self, node: DocNode) -> Declaration:
        doclet = self._normalize_doclet(node)
        external = self._namespace.upsert(DeclarationKind.NAMESPACE, EXTERNAL_NAMESPACE)
        declaration = external.upsert(DeclarationKind.INTERFACE, doclet.name)
        declaration.absorb(doclet.description, see=doclet.see or [])
        self._generate_children(node, declaration)
        return declaration

    # ------------------------------------------------------------------
    # Signature parts
    # ------------------------------------------------------------------

    @staticmethod
    def _generate_events(events: dict[str, DocEvent]) -> list[Declaration]:
        return [
            Declaration(
                DeclarationKind.EVENT,
                event_name,
                description=event.description,
                types=[map_type(type_) for type_ in event.types],
            )
            for event_name, event in events.items()
        ]

    @staticmethod
    def _generate_parameters(parameters: dict[str, DocParameter]) -> list[Declaration]:
        declarations: list[Declaration] = []
        for parameter_name, parameter in parameters.items():
            declaration = Declaration(
                DeclarationKind.PARAMETER,
                parameter_name,
                description=parameter.description,
                default_value=parameter.default_value or "",
                is_variable=parameter.is_variable,
                is_optional=parameter.is_optional and not parameter.is_variable,
            )
            declaration.absorb(types=parameter.types or [])
            declarations.append(declaration)
        return declarations
