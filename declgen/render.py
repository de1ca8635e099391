"""Render declaration trees as TypeScript declaration (``.d.ts``) text."""

import re

from declgen.declarations import Declaration, DeclarationKind

INDENT = "    "

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_MODULE_STATEMENT = re.compile(r'("[^"\n]*/(?:highcharts|globals))(";|" \{)')

_CONTAINER_KINDS = frozenset({DeclarationKind.MODULE, DeclarationKind.NAMESPACE, DeclarationKind.EXTERNAL_MODULE})


def render_module(module: Declaration) -> str:
    """Render a module with its header, imports, declarations and exports."""
    lines: list[str] = []

    if module.description:
        lines.extend(["/*!*", " *"])
        lines.extend(f" *  {line}".rstrip() for line in module.description.splitlines())
        lines.extend([" *", " *!*/"])
    if module.imports:
        lines.extend(module.imports)
    if lines:
        lines.append("")

    lines.extend(_render_members(module, 0))

    if module.exports:
        if lines and lines[-1]:
            lines.append("")
        lines.extend(module.exports)

    return "\n".join(lines).rstrip() + "\n"


def render_source_variant(text: str) -> str:
    """Point module specifiers of the main and globals modules to their ``.src`` files."""
    return _MODULE_STATEMENT.sub(r"\1.src\2", text)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def _render_members(container: Declaration, depth: int) -> list[str]:
    """Children of a module or namespace, separated by blank lines."""
    lines: list[str] = []
    for child in container.get_children():
        rendered = _render(child, depth, container)
        if not rendered:
            continue
        if lines:
            lines.append("")
        lines.extend(rendered)
    return lines


def _render(declaration: Declaration, depth: int, parent: Declaration) -> list[str]:  # noqa: C901, PLR0911
    indent = INDENT * depth
    exported = "export " if parent.kind in _CONTAINER_KINDS else ""
    in_body = parent.kind in {DeclarationKind.CLASS, DeclarationKind.INTERFACE}

    match declaration.kind:
        case DeclarationKind.NAMESPACE:
            name = declaration.name.rstrip(":")
            return [
                *_comment(declaration, indent),
                f"{indent}{exported}namespace {name} {{",
                *_render_members(declaration, depth + 1),
                f"{indent}}}",
            ]
        case DeclarationKind.EXTERNAL_MODULE:
            return [
                *_comment(declaration, indent),
                f'{indent}declare module "{declaration.path}" {{',
                *_render_members(declaration, depth + 1),
                f"{indent}}}",
            ]
        case DeclarationKind.MODULE:
            return _render_members(declaration, depth)
        case DeclarationKind.CLASS | DeclarationKind.INTERFACE:
            return [
                *_comment(declaration, indent),
                f"{indent}{exported}{_heading(declaration)} {{",
                *_render_members(declaration, depth + 1),
                f"{indent}}}",
            ]
        case DeclarationKind.CONSTRUCTOR:
            return [*_comment(declaration, indent), f"{indent}constructor({_parameters(declaration)});"]
        case DeclarationKind.FUNCTION:
            signature = f"({_parameters(declaration)}): {_types(declaration.types, 'void')};"
            if in_body:
                prefix = _modifiers(declaration)
                return [*_comment(declaration, indent), f"{indent}{prefix}{declaration.name}{signature}"]
            return [*_comment(declaration, indent), f"{indent}{exported}function {declaration.name}{signature}"]
        case DeclarationKind.FUNCTION_TYPE:
            return [
                *_comment(declaration, indent),
                f"{indent}{exported}type {declaration.name} = "
                f"({_parameters(declaration)}) => {_types(declaration.types, 'void')};",
            ]
        case DeclarationKind.TYPE:
            return [
                *_comment(declaration, indent),
                f"{indent}{exported}type {declaration.name} = ({_types(declaration.types)});",
            ]
        case DeclarationKind.PROPERTY:
            if in_body:
                optional = "?" if declaration.is_optional else ""
                name = _property_name(declaration.name)
                return [
                    *_comment(declaration, indent),
                    f"{indent}{_modifiers(declaration)}{name}{optional}: {_types(declaration.types)};",
                ]
            return [
                *_comment(declaration, indent),
                f"{indent}{exported}let {declaration.name}: {_types(declaration.types)};",
            ]
        case _:
            # events and parameters only appear in comments
            return []


def _heading(declaration: Declaration) -> str:
    keyword = "class" if declaration.kind is DeclarationKind.CLASS else "interface"
    if not declaration.types:
        return f"{keyword} {declaration.name}"
    if declaration.kind is DeclarationKind.CLASS:
        return f"class {declaration.name} extends {declaration.types[0]}"
    return f"interface {declaration.name} extends {', '.join(declaration.types)}"


def _modifiers(declaration: Declaration) -> str:
    modifiers = ""
    if declaration.is_private:
        modifiers += "private "
    if declaration.is_static:
        modifiers += "static "
    return modifiers


def _property_name(name: str) -> str:
    if name.startswith("["):
        return name.replace(":", ": ")
    if _IDENTIFIER.match(name):
        return name
    return f'"{name}"'


def _types(types: list[str], default: str = "any") -> str:
    return "|".join(types) if types else default


def _parameters(declaration: Declaration) -> str:
    rendered: list[str] = []
    for parameter in declaration.get_parameters():
        if parameter.is_variable:
            rendered.append(f"...{parameter.name}: Array<{_types(parameter.types)}>")
        else:
            optional = "?" if parameter.is_optional else ""
            rendered.append(f"{parameter.name}{optional}: {_types(parameter.types)}")
    return ", ".join(rendered)


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def _comment(declaration: Declaration, indent: str) -> list[str]:
    """JSDoc block of a declaration, empty when there is nothing to document."""
    blocks: list[list[str]] = []

    if declaration.description:
        blocks.append(declaration.description.splitlines())
    if declaration.see:
        blocks.append([f"@see {link}" for link in declaration.see])
    for parameter in declaration.get_parameters():
        name = f"[{parameter.name}={parameter.default_value}]" if parameter.default_value else parameter.name
        block = [f"@param {name}"]
        block.extend(f"       {line}" for line in parameter.description.splitlines())
        blocks.append(block)
    if declaration.types_description:
        blocks.append(f"@return {declaration.types_description}".splitlines())
    if declaration.events:
        blocks.append([f"@fires {event}" for event in declaration.events])

    if not blocks:
        return []

    lines = [f"{indent}/**"]
    for index, block in enumerate(blocks):
        if index:
            lines.append(f"{indent} *")
        lines.extend(f"{indent} * {_escape(line)}".rstrip() for line in block)
    lines.append(f"{indent} */")
    return lines


def _escape(line: str) -> str:
    return line.replace("*/", "*\\/")
