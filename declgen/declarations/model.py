"""Declaration tree: one tagged node type for every generated construct.

A Declaration owns its children and parameters through plain lists. The
parent link is a non-owning back-reference used only to compute full names
and to find enclosing scopes; detaching or cloning clears it.
"""

import copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any

from declgen.exceptions import DeclarationError

from .types import merge_unique


class DeclarationKind(StrEnum):
    """Kind tag of a declaration node."""

    MODULE = "module"
    NAMESPACE = "namespace"
    INTERFACE = "interface"
    CLASS = "class"
    FUNCTION = "function"
    FUNCTION_TYPE = "function_type"
    CONSTRUCTOR = "constructor"
    PROPERTY = "property"
    PARAMETER = "parameter"
    TYPE = "type"
    EVENT = "event"
    EXTERNAL_MODULE = "external_module"


CALLABLE_KINDS = frozenset({DeclarationKind.FUNCTION, DeclarationKind.FUNCTION_TYPE, DeclarationKind.CONSTRUCTOR})
INTERFACE_KINDS = frozenset({DeclarationKind.CLASS, DeclarationKind.INTERFACE})
MODULE_KINDS = frozenset({DeclarationKind.MODULE, DeclarationKind.EXTERNAL_MODULE})


@dataclass(eq=False)
class Declaration:
    """Mutable node of a declaration tree.

    Shared fields apply to every kind; ``parameters``, ``types_description``
    and ``events`` are only meaningful for callables, ``default_value`` for
    parameters, ``imports``/``exports`` for modules and ``path`` for
    external modules.

    Lookups by name always return the first match. Same-named siblings are
    legal (function overloads) and keep their insertion order.
    """

    kind: DeclarationKind
    name: str = ""
    description: str = ""
    see: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    is_optional: bool = False
    is_private: bool = False
    is_static: bool = False
    is_variable: bool = False
    types_description: str = ""
    default_value: str = ""
    events: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    path: str = ""
    _children: list["Declaration"] = field(default_factory=list, init=False, repr=False)
    _parameters: list["Declaration"] = field(default_factory=list, init=False, repr=False)
    _parent: "Declaration | None" = field(default=None, init=False, repr=False)

    # ------------------------------------------------------------------
    # Tree position
    # ------------------------------------------------------------------

    @property
    def parent(self) -> "Declaration | None":
        return self._parent

    def ancestors(self) -> Iterator["Declaration"]:
        """Parents from the closest one up to the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def closest(self, *kinds: DeclarationKind) -> "Declaration | None":
        """This declaration or its nearest ancestor of one of the given kinds."""
        for candidate in (self, *self.ancestors()):
            if candidate.kind in kinds:
                return candidate
        return None

    @property
    def full_name(self) -> str:
        """Dot-joined names from the root, skipping unnamed ancestors."""
        names = [declaration.name for declaration in (self, *self.ancestors()) if declaration.name]
        return ".".join(reversed(names))

    def _attach(self, child: "Declaration") -> None:
        if child is self or any(ancestor is child for ancestor in self.ancestors()):
            raise DeclarationError(f"Cannot add {child.full_name or child.kind} below itself")
        previous = child.parent
        if previous is not None:
            previous._detach(child)
        child._parent = self

    def _detach(self, child: "Declaration") -> None:
        for collection in (self._children, self._parameters):
            for index, candidate in enumerate(collection):
                if candidate is child:
                    del collection[index]
                    child._parent = None
                    return

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    @property
    def has_children(self) -> bool:
        return len(self._children) > 0

    def add_children(self, *children: "Declaration") -> None:
        for child in children:
            self._attach(child)
            self._children.append(child)

    def get_children(self, name: str | None = None) -> list["Declaration"]:
        if name is None:
            return list(self._children)
        return [child for child in self._children if child.name == name]

    def get_children_names(self, recursive: bool = False) -> list[str]:
        """Names of the children, or full names of all descendants when recursive."""
        if not recursive:
            return merge_unique([child.name for child in self._children])
        names: list[str] = []
        for child in self._children:
            names.append(child.full_name)
            names.extend(child.get_children_names(recursive=True))
        return merge_unique(names)

    def remove_children(self) -> list["Declaration"]:
        children = self._children
        self._children = []
        for child in children:
            child._parent = None
        return children

    def remove_child(self, name: str) -> "Declaration | None":
        for child in self._children:
            if child.name == name:
                self._detach(child)
                return child
        return None

    def upsert(self, kind: DeclarationKind, name: str) -> "Declaration":
        """Return the first child with this kind and name, creating it when missing."""
        for child in self._children:
            if child.kind is kind and child.name == name:
                return child
        child = Declaration(kind, name)
        self.add_children(child)
        return child

    def walk(self) -> Iterator["Declaration"]:
        """This declaration and all its descendants, depth-first."""
        yield self
        for child in self._children:
            yield from child.walk()

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def has_parameters(self) -> bool:
        return len(self._parameters) > 0

    def get_parameters(self) -> list["Declaration"]:
        return list(self._parameters)

    def get_parameter_names(self) -> list[str]:
        return [parameter.name for parameter in self._parameters]

    def set_parameters(self, *parameters: "Declaration") -> None:
        for parameter in self._parameters:
            parameter._parent = None
        self._parameters = []
        for parameter in parameters:
            self._attach(parameter)
            self._parameters.append(parameter)

    # ------------------------------------------------------------------
    # Merging and copying
    # ------------------------------------------------------------------

    def absorb(
        self,
        description: str = "",
        types: Iterable[str] = (),
        see: Iterable[str] = (),
    ) -> "Declaration":
        """Fold documentation into this declaration.

        The first non-empty description wins; types and links are unioned in
        first-seen order.
        """
        if description and not self.description:
            self.description = description
        self.types[:] = merge_unique(self.types, list(types))
        self.see[:] = merge_unique(self.see, list(see))
        return self

    def clone(self) -> "Declaration":
        """Structurally independent deep copy without a parent."""
        values = {item.name: copy.copy(getattr(self, item.name)) for item in fields(self) if item.init}
        duplicate = Declaration(**values)
        duplicate.set_parameters(*(parameter.clone() for parameter in self._parameters))
        duplicate.add_children(*(child.clone() for child in self._children))
        return duplicate

    def to_dict(self) -> dict[str, Any]:
        """Structural snapshot, used for comparisons and debugging output."""
        snapshot: dict[str, Any] = {
            item.name: copy.copy(getattr(self, item.name)) for item in fields(self) if item.init
        }
        snapshot["kind"] = str(self.kind)
        snapshot["parameters"] = [parameter.to_dict() for parameter in self._parameters]
        snapshot["children"] = [child.to_dict() for child in self._children]
        return snapshot
