"""Type-expression and name helpers shared by generators, merge and render.

Type expressions are kept as plain strings in TypeScript syntax
(``Array<Highcharts.Point>|string``); these helpers split, normalize and
rewrite them without parsing them into a full AST.
"""

import json
import re
from typing import Any

TYPE_SEPARATOR = r"[\s|&,:;=()\[\]<>{}?]"
"""Characters that may follow a type name inside a type expression."""

TYPE_MAPPER_DICTIONARY: dict[str, str] = {
    "*": "any",
    "Array": "Array<any>",
    "Boolean": "boolean",
    "Number": "number",
    "Object": "object",
    "String": "string",
    "function": "Function",
}

_GENERIC_TYPE = re.compile(r"^([\w$.]+?)\.?<(.+)>$", re.DOTALL)
_STRING_LITERAL = re.compile(r"\"[^\"]*\"|'[^']*'")
_TYPE_NAME = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")
_OPENING = "([<{"
_CLOSING = ")]>}"


def capitalize(text: str) -> str:
    """Uppercase the first character only."""
    return text[:1].upper() + text[1:]


def merge_unique(target: list[str], *sources: list[str]) -> list[str]:
    """Union of lists keeping first-seen order, duplicates dropped."""
    merged: list[str] = []
    seen: set[str] = set()
    for items in (target, *sources):
        for item in items:
            if item not in seen:
                seen.add(item)
                merged.append(item)
    return merged


def namespaces(name: str) -> list[str]:
    """Split a documented name into its path segments.

    Splits on ``.``, ``#`` and ``~``; a ``:`` ends a scope-marker segment
    (``external:Foo`` -> ``["external:", "Foo"]``). Bracketed parts such as
    ``[key:string]`` stay intact.
    """
    segments: list[str] = []
    current = ""
    depth = 0
    for char in name:
        if char in _OPENING:
            depth += 1
        elif char in _CLOSING:
            depth = max(depth - 1, 0)
        if depth == 0 and char in ".#~":
            if current:
                segments.append(current)
            current = ""
            continue
        current += char
        if depth == 0 and char == ":":
            segments.append(current)
            current = ""
    if current:
        segments.append(current)
    return segments


def camel_case_options_name(path: str, namespace: str = "") -> str:
    """Derive an options interface name from a dotted option path.

    >>> camel_case_options_name("plotOptions.series.dataLabels")
    'PlotSeriesDataLabelsOptions'
    """
    if namespace and path.startswith(f"{namespace}."):
        path = path[len(namespace) + 1 :]
    return "".join(capitalize(segment) for segment in namespaces(path)).replace("Options", "") + "Options"


def split_top_level(text: str, separator: str) -> list[str]:
    """Split on a separator character that is not nested in brackets."""
    parts: list[str] = []
    current = ""
    depth = 0
    for char in text:
        if char in _OPENING:
            depth += 1
        elif char in _CLOSING:
            depth = max(depth - 1, 0)
        if char == separator and depth == 0:
            parts.append(current)
            current = ""
            continue
        current += char
    parts.append(current)
    return parts


def map_type(type_: str) -> str:
    """Normalize a documented type name to its declaration spelling.

    Applies the normalization table through unions, generics and
    parentheses, so ``Array.<*>|Number`` becomes ``Array<any>|number``.
    """
    type_ = type_.strip()

    members = split_top_level(type_, "|")
    if len(members) > 1:
        return "|".join(map_type(member) for member in members)

    if type_.startswith("(") and type_.endswith(")") and _balanced(type_[1:-1]):
        return f"({map_type(type_[1:-1])})"

    if match := _GENERIC_TYPE.match(type_):
        generic, arguments = match.groups()
        mapped = ", ".join(map_type(argument) for argument in split_top_level(arguments, ","))
        return f"{generic}<{mapped}>"

    return TYPE_MAPPER_DICTIONARY.get(type_, type_)


def map_value(value: Any) -> str:
    """Literal type text of an enumerated option value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return json.dumps(str(value))


def is_string_literal(type_: str) -> bool:
    return type_.startswith('"') and type_.endswith('"') and len(type_) >= 2


def extract_type_names(*types: str) -> list[str]:
    """Collect the referenced type names of type expressions, first-seen order.

    String literals are ignored, so ``"line"|Highcharts.SeriesOptions``
    yields ``["Highcharts.SeriesOptions"]``.
    """
    names: list[str] = []
    for type_ in types:
        for name in _TYPE_NAME.findall(_STRING_LITERAL.sub(" ", type_)):
            if name not in names:
                names.append(name)
    return names


def replace_type_name(type_: str, name: str, replacement: str) -> str:
    """Replace whole-token occurrences of a type name.

    ``Highcharts.Foo`` is replaced in ``Array<Highcharts.Foo>`` but not in
    ``Highcharts.FooBar``.
    """
    pattern = re.compile(rf"(?<![\w$.]){re.escape(name)}(?={TYPE_SEPARATOR}|$)")
    return pattern.sub(replacement, type_)


def _balanced(text: str) -> bool:
    depth = 0
    for char in text:
        if char in _OPENING:
            depth += 1
        elif char in _CLOSING:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0
