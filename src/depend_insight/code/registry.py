"""CodeRegistry: the arena that owns every package and type of a project.

Types are stored by integer id. Parent and interface references are recorded
by name when declared and bound to ids from the types registered so far.
Every new type re-resolves the references spelled with its name, so the
binding never depends on declaration order: a builder may declare
``B extends A`` before ``A``, and a same-package ``Base`` declared after a
child still takes over from a ``Base`` in another package.

Name resolution for a reference ``ref`` declared in package ``p``:
    1. exact qualified name (``"library.Base"``)
    2. ``"<p>.<ref>"`` (same package)
    3. bare name, if exactly one type of the right kind carries it
Anything else stays unresolved and is treated as an external type.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional

from ..exceptions import DuplicateTypeError
from ..exceptions.taxonomy import ErrorCode, ModelError
from ..logging_config import get_logger
from .models import Method, NodeKind, Package, Type

logger = get_logger(__name__)


class CodeRegistry:
    """Project-wide registry of packages and types."""

    def __init__(self) -> None:
        self._packages: dict[str, Package] = {}
        self._types: list[Type] = []
        self._by_qualified: dict[str, int] = {}
        self._by_name: dict[str, list[int]] = defaultdict(list)
        # bare name -> ids of types holding a reference spelled with it
        self._referrers: dict[str, set[int]] = defaultdict(set)

    # ── Construction ───────────────────────────────────────────────

    def add_package(self, name: str) -> Package:
        """Return the package called *name*, creating it on first use."""
        package = self._packages.get(name)
        if package is None:
            package = Package(name=name)
            self._packages[name] = package
        return package

    def add_class(
        self,
        package: Package | str,
        name: str,
        parent: Optional[str] = None,
        interfaces: Iterable[str] = (),
    ) -> Type:
        """Register a class with an optional parent class and implemented interfaces."""
        return self._add_type(package, name, NodeKind.CLASS, parent, interfaces)

    def add_interface(
        self,
        package: Package | str,
        name: str,
        extends: Iterable[str] = (),
    ) -> Type:
        """Register an interface extending zero or more parent interfaces."""
        return self._add_type(package, name, NodeKind.INTERFACE, None, extends)

    def add_method(self, owner: Type, name: str, is_abstract: bool = False) -> Method:
        method = Method(name=name, owner=owner, is_abstract=is_abstract)
        owner.methods.append(method)
        return method

    def add_function(self, package: Package | str, name: str) -> Method:
        if isinstance(package, str):
            package = self.add_package(package)
        function = Method(name=name, owner=package)
        package.functions.append(function)
        return function

    def _add_type(
        self,
        package: Package | str,
        name: str,
        kind: NodeKind,
        parent: Optional[str],
        interfaces: Iterable[str],
    ) -> Type:
        if isinstance(package, str):
            package = self.add_package(package)

        qualified = f"{package.name}.{name}"
        if qualified in self._by_qualified:
            raise DuplicateTypeError(qualified)

        node = Type(
            id=len(self._types),
            name=name,
            kind=kind,
            package=package,
            parent_ref=parent,
            interface_refs=list(dict.fromkeys(interfaces)),
            _registry=self,
        )
        self._types.append(node)
        self._by_qualified[qualified] = node.id
        self._by_name[name].append(node.id)
        package.add_type(node)

        for ref in ([node.parent_ref] if parent is not None else []) + node.interface_refs:
            self._referrers[_bare(ref)].add(node.id)

        self._bind(node)
        self._rebind_referrers(node)
        return node

    # ── Resolution ─────────────────────────────────────────────────

    def _find(self, ref: str, package: Package, kind: NodeKind) -> Optional[int]:
        for key in (ref, f"{package.name}.{ref}"):
            type_id = self._by_qualified.get(key)
            if type_id is not None:
                return type_id if self._types[type_id].kind is kind else None

        candidates = [i for i in self._by_name.get(ref, ()) if self._types[i].kind is kind]
        if len(candidates) == 1:
            return candidates[0]
        return None

    def _bind(self, node: Type) -> None:
        """Resolve every reference of *node* against the current registry."""
        if node.parent_ref is not None:
            node.parent_id = self._find(node.parent_ref, node.package, NodeKind.CLASS)

        node.interface_ids = {}
        for ref in node.interface_refs:
            type_id = self._find(ref, node.package, NodeKind.INTERFACE)
            if type_id is not None:
                node.interface_ids[ref] = type_id

    def _rebind_referrers(self, new_type: Type) -> None:
        # A new type may change earlier bindings of its name
        for type_id in sorted(self._referrers.get(new_type.name, ())):
            if type_id != new_type.id:
                self._bind(self._types[type_id])

    def link(self) -> int:
        """Re-run resolution for every type and report what stays unresolved.

        Resolution is recomputed from scratch, so the result is the same
        whatever order the types were added in.

        Returns:
            Number of parent/interface references that remain unresolved.
        """
        unresolved = 0
        for node in self._types:
            self._bind(node)
            for ref in node.unresolved_references():
                unresolved += 1
                logger.debug(
                    ModelError(
                        message=f"Unresolved reference '{ref}' in {node.qualified_name}",
                        code=ErrorCode.DI101,
                        context={"type": node.qualified_name, "reference": ref},
                        recovery_hint="Treated as an external type",
                    ).to_json()
                )
        return unresolved

    # ── Lookup ─────────────────────────────────────────────────────

    @property
    def packages(self) -> list[Package]:
        """All packages in insertion order."""
        return list(self._packages.values())

    @property
    def types(self) -> tuple[Type, ...]:
        return tuple(self._types)

    def get_package(self, name: str) -> Optional[Package]:
        return self._packages.get(name)

    def get_type(self, type_id: int) -> Type:
        return self._types[type_id]

    def find_type(self, name: str) -> Optional[Type]:
        """Look a type up by qualified name, or by bare name when unambiguous."""
        type_id = self._by_qualified.get(name)
        if type_id is None:
            ids = self._by_name.get(name, [])
            if len(ids) != 1:
                return None
            type_id = ids[0]
        return self._types[type_id]

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Type) and 0 <= node.id < len(self._types) and self._types[node.id] is node


def _bare(ref: str) -> str:
    return ref.rsplit(".", 1)[-1]
