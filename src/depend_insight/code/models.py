"""Code model: packages, types and methods.

Ownership runs downward only:

    CodeRegistry (arena, owns every Type by id)
        └── Package
                ├── Type (CLASS | INTERFACE)
                │       └── Method
                └── Method (free function)

Inheritance edges are integer handles into the registry, never object
references, so a malformed graph with cyclic inheritance is still a plain
tree of owned objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .registry import CodeRegistry


class NodeKind(Enum):
    """The two variants of a Type."""

    CLASS = "class"
    INTERFACE = "interface"


@dataclass(eq=False)
class Method:
    """A method owned by a Type, or a free function owned by a Package."""

    name: str
    owner: Union[Type, Package] = field(repr=False)
    is_abstract: bool = False

    @property
    def is_function(self) -> bool:
        return isinstance(self.owner, Package)

    @property
    def package(self) -> Package:
        if isinstance(self.owner, Package):
            return self.owner
        return self.owner.package


@dataclass(eq=False)
class Type:
    """A class or an interface.

    ``parent_ref`` and ``interface_refs`` hold the names as declared by the
    parser. The registry resolves them into ids; a declared name with no id is
    an unresolved (external) reference.
    """

    id: int
    name: str
    kind: NodeKind
    package: Package = field(repr=False)
    methods: list[Method] = field(default_factory=list, repr=False)

    parent_ref: Optional[str] = None
    interface_refs: list[str] = field(default_factory=list)

    # Resolved handles (set by the registry)
    parent_id: Optional[int] = None
    interface_ids: dict[str, int] = field(default_factory=dict, repr=False)

    _registry: Optional[CodeRegistry] = field(default=None, repr=False)

    @property
    def qualified_name(self) -> str:
        return f"{self.package.name}.{self.name}"

    @property
    def is_class(self) -> bool:
        return self.kind is NodeKind.CLASS

    @property
    def is_interface(self) -> bool:
        return self.kind is NodeKind.INTERFACE

    def get_kind(self) -> NodeKind:
        return self.kind

    def has_parent_class(self) -> bool:
        """True if a parent class is declared, resolved or not."""
        return self.is_class and self.parent_ref is not None

    def has_unresolved_parent(self) -> bool:
        return self.has_parent_class() and self.parent_id is None

    def get_parent_class(self) -> Optional[Type]:
        """Return the resolved parent class, or None for roots and unresolved parents."""
        if self.parent_id is None or self._registry is None:
            return None
        return self._registry.get_type(self.parent_id)

    def get_implemented_interfaces(self) -> list[Type]:
        """Resolved interfaces this type implements (class) or extends (interface).

        Unresolved interface names are skipped; declaration order is kept.
        """
        if self._registry is None:
            return []
        resolved = []
        for ref in self.interface_refs:
            type_id = self.interface_ids.get(ref)
            if type_id is not None:
                resolved.append(self._registry.get_type(type_id))
        return resolved

    def unresolved_references(self) -> list[str]:
        """Declared parent/interface names that did not resolve."""
        missing = []
        if self.has_unresolved_parent():
            missing.append(self.parent_ref)
        missing.extend(ref for ref in self.interface_refs if ref not in self.interface_ids)
        return missing

    def get_method(self, name: str) -> Optional[Method]:
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass(eq=False)
class Package:
    """A named namespace holding types and free functions in insertion order."""

    name: str
    _types: list[Type] = field(default_factory=list, repr=False)
    functions: list[Method] = field(default_factory=list, repr=False)

    def add_type(self, node: Type) -> None:
        """Append a type unless it is already present."""
        if all(existing.id != node.id for existing in self._types):
            self._types.append(node)

    def get_types(self) -> tuple[Type, ...]:
        return tuple(self._types)

    @property
    def types(self) -> tuple[Type, ...]:
        return self.get_types()

    @property
    def classes(self) -> tuple[Type, ...]:
        return tuple(t for t in self._types if t.is_class)

    @property
    def interfaces(self) -> tuple[Type, ...]:
        return tuple(t for t in self._types if t.is_interface)

    def __len__(self) -> int:
        return len(self._types)
