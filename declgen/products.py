"""Cross-variant assembly of the declaration modules of all products.

One namespace tree is generated per product from the main documentation
tree; additional documented modules become factory modules whose
declarations are generated into every product namespace. Options trees are
merged into their modules, and modular products receive the incremental
surface they add on top of the main module.

Example:
    >>> modules = build_modules(load_namespace_trees("tree-namespace.json"))
    >>> sorted(modules)[:2]
    ['code/globals', 'code/highcharts']
"""

import posixpath

from declgen.declarations import Declaration, DeclarationKind
from declgen.doclets import DocNode
from declgen.exceptions import GenerationError
from declgen.generators import NamespaceGenerator, OptionsGenerator
from declgen.logging import get_declgen_logger
from declgen.merge import filter_child_declarations, filter_invalid_types, merge_declarations
from declgen.settings import Settings, settings as default_settings

logger = get_declgen_logger(__name__)


def relative_module(from_module: str, to_module: str) -> str:
    """Module specifier of ``to_module`` as imported from ``from_module``.

    >>> relative_module("code/modules/stock", "code/highcharts")
    '../highcharts'
    """
    specifier = posixpath.relpath(to_module, posixpath.dirname(from_module) or ".")
    return specifier if specifier.startswith(".") else f"./{specifier}"


def new_globals_module(settings: Settings = default_settings) -> Declaration:
    """Unnamed module collecting the global declarations of all products."""
    return Declaration(DeclarationKind.MODULE, description=settings.copyright)


def new_namespace_module(settings: Settings = default_settings) -> Declaration:
    namespace = Declaration(DeclarationKind.MODULE, settings.namespace_name)
    globals_name = posixpath.basename(settings.globals_module)
    namespace.imports.append(f'import * as {globals_name} from "./{globals_name}";')
    namespace.exports.append(f"export as namespace {settings.namespace_name};")
    return namespace


def generate_module(module_path: str, settings: Settings = default_settings) -> Declaration:
    """Factory module of an optional module that extends the main namespace.

    The module imports the main module and default-exports a ``factory``
    function taking the imported namespace.
    """
    name = settings.namespace_name
    module = Declaration(DeclarationKind.MODULE, description=settings.copyright)
    module.imports.append(f'import * as {name} from "{relative_module(module_path, settings.main_module)}";')
    module.exports.append("export default factory;")

    factory = Declaration(
        DeclarationKind.FUNCTION,
        "factory",
        description=f"Adds the module to the imported {name} namespace.",
    )
    factory.set_parameters(
        Declaration(
            DeclarationKind.PARAMETER,
            "highcharts",
            description=f"The imported {name} namespace to extend.",
            types=[f"typeof {name}"],
        )
    )
    module.add_children(factory)
    return module


def generate(
    product: str,
    doc_tree: DocNode,
    globals_module: Declaration | None = None,
    settings: Settings = default_settings,
) -> Declaration:
    """Generate the namespace tree of one product variant."""
    if globals_module is None:
        globals_module = new_globals_module(settings)
    namespace = new_namespace_module(settings)
    NamespaceGenerator(globals_module, namespace, product, settings).generate(doc_tree)
    return namespace


def generate_options(doc_tree: DocNode, settings: Settings = default_settings) -> Declaration:
    """Generate the option interfaces of an options tree.

    Raises:
        MissingAnchorError: The tree lacks ``Options``, its ``series`` or a
            series ``data`` option.
    """
    generator = OptionsGenerator(settings=settings)
    namespace = generator.generate(doc_tree)
    if generator.collisions:
        logger.warning("Merged colliding literal aliases: %s", ", ".join(generator.collisions))
    return namespace


def merge(target: Declaration, source: Declaration) -> None:
    merge_declarations(target, source)


def diff(
    candidate: Declaration,
    reference: Declaration,
    product: str,
    path: str | None = None,
    settings: Settings = default_settings,
) -> Declaration:
    """Incremental surface of a product namespace over the reference namespace.

    The novel declarations are wrapped in an external module that augments
    the reference module. ``path`` defaults to the main module as seen from
    the product's modular module.
    """
    if path is None:
        module_path = settings.modular_products.get(product, settings.main_module)
        path = relative_module(module_path, settings.main_module)

    external = Declaration(DeclarationKind.EXTERNAL_MODULE, reference.name, path=path)
    external.add_children(*filter_child_declarations(candidate.get_children(), reference.get_children(), product))
    return external


def prune_invalid_types(tree: Declaration, settings: Settings = default_settings) -> list[str]:
    return filter_invalid_types(tree, settings)


def build_modules(  # noqa: C901
    namespace_trees: dict[str, DocNode],
    options_trees: dict[str, DocNode] | None = None,
    settings: Settings = default_settings,
) -> dict[str, Declaration]:
    """Assemble every output module from the documentation trees.

    Args:
        namespace_trees: Documentation tree per module path; must contain
                         ``settings.main_module``.
        options_trees: Options tree per module path.
        settings: Products, module paths and naming.

    Returns:
        Declaration module per module path, in generation order.

    Raises:
        GenerationError: The main module is not documented or not a product.
    """
    main_tree = namespace_trees.get(settings.main_module)
    if main_tree is None:
        raise GenerationError(f"Documentation tree of {settings.main_module} is missing")

    product_modules = settings.product_modules
    if settings.main_module not in product_modules:
        raise GenerationError(f"Main module {settings.main_module} is not a product module")

    globals_module = new_globals_module(settings)
    modules: dict[str, Declaration] = {settings.globals_module: globals_module}
    generators: dict[str, NamespaceGenerator] = {}

    for module, product in product_modules.items():
        namespace = new_namespace_module(settings)
        generators[module] = NamespaceGenerator(globals_module, namespace, product, settings)
        generators[module].generate(main_tree)

    for module, tree in namespace_trees.items():
        if module in modules or module in product_modules:
            continue
        for generator in generators.values():
            generator.generate(tree)
        modules[module] = generate_module(module, settings)

    for module, generator in generators.items():
        modules[module] = generator.namespace

    for module, tree in (options_trees or {}).items():
        target = modules.get(module)
        if target is None:
            logger.warning("Skipping options of unknown module %s", module)
            continue
        try:
            options = generate_options(tree, settings)
        except GenerationError as exc:
            logger.error("Options generation for %s failed: %s", module, exc)
            continue
        merge_declarations(target, options)

    main_module = modules[settings.main_module]
    for module, product in settings.modular_product_modules.items():
        target = modules.get(module)
        candidate = modules.get(settings.products.get(product, ""))
        if target is None or candidate is None:
            logger.debug("No modular output for %s", product)
            continue
        target.add_children(
            diff(candidate, main_module, product, relative_module(module, settings.main_module), settings)
        )

    for module in product_modules:
        prune_invalid_types(modules[module], settings)

    return modules
