"""Merge and filter operations across declaration trees.

These run after generation, when the per-product trees are complete, and
combine, diff or clean them up.
"""

from declgen.declarations import (
    CALLABLE_KINDS,
    INTERFACE_KINDS,
    Declaration,
    DeclarationKind,
    capitalize,
    extract_type_names,
    merge_unique,
    replace_type_name,
)
from declgen.generators.options import SERIES_UNION
from declgen.logging import get_declgen_logger
from declgen.settings import Settings, settings as default_settings

logger = get_declgen_logger(__name__)


def merge_declarations(target: Declaration, source: Declaration) -> None:
    """Deep-merge source into target.

    The target description is only filled when empty; types and links are
    unioned with the target order first. The n-th source child of a given
    name and kind merges into the n-th matching target child, so overloads
    line up; source children without a counterpart are cloned and appended.
    Merging a clone of the target into itself changes nothing.
    """
    target.absorb(source.description, source.types, source.see)

    seen: dict[tuple[DeclarationKind, str], int] = {}
    for source_child in source.get_children():
        key = (source_child.kind, source_child.name)
        position = seen.get(key, 0)
        seen[key] = position + 1

        counterparts = [child for child in target.get_children(source_child.name) if child.kind is source_child.kind]
        if position < len(counterparts):
            merge_declarations(counterparts[position], source_child)
        else:
            target.add_children(source_child.clone())


def filter_child_declarations(
    to_filter: list[Declaration],
    reference: list[Declaration],
    product: str,
) -> list[Declaration]:
    """Declarations of ``to_filter`` that are novel relative to ``reference``.

    Returns independent clones. Matched classes and interfaces are reduced
    to a fresh interface of their novel members, kept only when non-empty.
    A matched series union becomes ``<Product>SeriesOptionsType`` listing
    the series types the reference does not know. Everything else with a
    same-named reference, constructors included, is dropped.
    """
    filtered: list[Declaration] = []

    for declaration in to_filter:
        found = next((candidate for candidate in reference if candidate.name == declaration.name), None)

        if found is None:
            filtered.append(declaration.clone())
            continue

        if found.kind in INTERFACE_KINDS:
            novel = Declaration(DeclarationKind.INTERFACE, declaration.name)
            novel.add_children(
                *filter_child_declarations(declaration.get_children(), found.get_children(), product)
            )
            if novel.has_children:
                filtered.append(novel)
        elif found.kind is DeclarationKind.TYPE and found.name == SERIES_UNION:
            novel_types = [type_ for type_ in declaration.types if type_ not in found.types]
            if novel_types:
                filtered.append(
                    Declaration(
                        DeclarationKind.TYPE,
                        f"{capitalize(product)}{SERIES_UNION}",
                        description=found.description,
                        types=novel_types,
                    )
                )

    return filtered


def filter_invalid_types(namespace: Declaration, settings: Settings = default_settings) -> list[str]:
    """Neutralize namespaced type references that nothing in the namespace declares.

    Every ``<namespace>.``-prefixed token in the types of a declaration, its
    descendants and callable parameters must equal a declared full name;
    other tokens are replaced with ``settings.wildcard_type``. Only whole
    tokens match, so ``Highcharts.Foo`` never touches ``Highcharts.FooBar``.

    Returns:
        The replaced type names in first-seen order.
    """
    declared = set(namespace.get_children_names(recursive=True))
    prefix = f"{settings.namespace_name}."
    removed: list[str] = []

    def prune(declaration: Declaration) -> None:
        for name in extract_type_names(*declaration.types):
            if not name.startswith(prefix) or name in declared:
                continue
            if name not in removed:
                removed.append(name)
            declaration.types[:] = merge_unique(
                [replace_type_name(type_, name, settings.wildcard_type) for type_ in declaration.types]
            )

        for child in declaration.get_children():
            prune(child)
        if declaration.kind in CALLABLE_KINDS:
            for parameter in declaration.get_parameters():
                prune(parameter)

    prune(namespace)

    if removed:
        logger.info("Removed %s", ", ".join(removed))
    return removed
