"""Input model of parsed API documentation trees.

A documentation tree is a nested structure of DocNode objects, each carrying
a Doclet (the structured doc-comment) and a DocMeta (source position). The
models accept the camelCase JSON emitted by the documentation parser; the
generators only read them.
"""

import json
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from declgen.logging import get_declgen_logger

logger = get_declgen_logger(__name__)

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _as_list(value: Any) -> Any:
    """Accept a single string where a list of strings is expected."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


def _type_names(value: Any) -> Any:
    """Accept ``{"names": [...]}``, a list, or a ``|``-joined string."""
    if isinstance(value, dict):
        return value.get("names")
    if isinstance(value, str):
        return [value]
    return value


class DocParameter(BaseModel):
    """Documented parameter of a function, constructor or callback typedef."""

    model_config = _CAMEL_CONFIG

    description: str = ""
    types: list[str] | None = None
    is_optional: bool = False
    is_variable: bool = False
    default_value: str | None = None

    @field_validator("types", mode="before")
    @classmethod
    def _coerce_types(cls, v: Any) -> Any:
        return _type_names(v)

    @field_validator("default_value", mode="before")
    @classmethod
    def _coerce_default(cls, v: Any) -> Any:
        return v if v is None or isinstance(v, str) else json.dumps(v)


class DocReturn(BaseModel):
    """Documented return value."""

    model_config = _CAMEL_CONFIG

    description: str = ""
    types: list[str] | None = None

    @field_validator("types", mode="before")
    @classmethod
    def _coerce_types(cls, v: Any) -> Any:
        return _type_names(v)


class DocEvent(BaseModel):
    """Documented event fired by a function or constructor."""

    model_config = _CAMEL_CONFIG

    description: str = ""
    types: list[str] = Field(default_factory=list)

    @field_validator("types", mode="before")
    @classmethod
    def _coerce_types(cls, v: Any) -> Any:
        return _type_names(v) or []


class Doclet(BaseModel):
    """Structured documentation record attached to a doc node.

    ``types`` is filled from either the ``types`` list of namespace trees or
    the ``type.names`` list of option trees. ``values`` usually arrives as a
    JSON-encoded list of enumerated literals.
    """

    model_config = _CAMEL_CONFIG

    kind: str = ""
    name: str = ""
    description: str = ""
    types: list[str] | None = None
    parameters: dict[str, DocParameter] | None = None
    returns: DocReturn | None = Field(default=None, validation_alias=AliasChoices("return", "returns"))
    see: list[str] | None = None
    products: list[str] | None = None
    access: str | None = None
    is_global: bool = False
    is_private: bool = False
    is_static: bool = False
    is_optional: bool = False
    values: str | list[Any] | None = None
    exclude: list[str] | None = None
    extends_list: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("extendsList", "_extends", "extends", "extends_list"),
    )
    events: dict[str, DocEvent] | None = None
    fires: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _fold_type(cls, data: Any) -> Any:
        """Fold the option-tree ``type`` object into ``types``."""
        if isinstance(data, dict) and "type" in data:
            data = dict(data)
            type_ = data.pop("type")
            if "types" not in data:
                data["types"] = _type_names(type_)
        return data

    @field_validator("types", mode="before")
    @classmethod
    def _coerce_types(cls, v: Any) -> Any:
        return _type_names(v)

    @field_validator("see", "products", "exclude", "extends_list", "fires", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> Any:
        return _as_list(v)

    @property
    def is_private_access(self) -> bool:
        return self.access == "private"


class DocMeta(BaseModel):
    """Source position and naming of a doc node."""

    model_config = _CAMEL_CONFIG

    fullname: str = ""
    name: str = ""
    filename: str = ""
    line: int = 0
    line_end: int = 0


class DocNode(BaseModel):
    """Node of a parsed documentation tree.

    ``children`` is an ordered mapping. A list of children is accepted as
    well; it is keyed by child name, and repeated names (overloads) get a
    ``(n)`` suffix so every sibling survives in its original order.
    """

    model_config = ConfigDict(extra="ignore")

    doclet: Doclet | None = None
    children: dict[str, "DocNode"] = Field(default_factory=dict)
    meta: DocMeta = Field(default_factory=DocMeta)

    @field_validator("children", mode="before")
    @classmethod
    def _key_children(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, list):
            return v
        keyed: dict[str, Any] = {}
        for index, child in enumerate(v):
            name = _child_name(child) or str(index)
            key, count = name, 1
            while key in keyed:
                count += 1
                key = f"{name}({count})"
            keyed[key] = child
        return keyed

    @property
    def name(self) -> str:
        return self.meta.name or (self.doclet.name if self.doclet else "")

    @property
    def fullname(self) -> str:
        return self.meta.fullname or self.meta.name


def _child_name(child: Any) -> str:
    if isinstance(child, DocNode):
        return child.name
    if isinstance(child, dict):
        doclet = child.get("doclet") or {}
        meta = child.get("meta") or {}
        return str(meta.get("name") or doclet.get("name") or "")
    return ""


def parse_values(values: str | list[Any] | None) -> list[Any] | None:
    """Decode an enumerated values payload.

    Malformed payloads are logged and treated as absent, so the caller falls
    back to the declared types.
    """
    if values is None or isinstance(values, list):
        return values
    try:
        decoded = json.loads(values)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed values %r: %s", values, exc)
        return None
    if not isinstance(decoded, list):
        logger.warning("Ignoring values that are not a list: %r", values)
        return None
    return decoded


DocNode.model_rebuild()
