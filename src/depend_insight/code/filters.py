"""Node filters deciding which packages and types take part in an analysis.

A FilterCollection is an ordered AND-chain of filters. It is an ordinary
object handed to analyzers, never module-level state, and analyzers work on
``snapshot()`` so that later ``add_filter``/``clear`` calls cannot change a
run that is already in progress.
"""

from __future__ import annotations

import threading
from typing import Iterable, Iterator, Protocol, Union

from .models import Method, Package, Type

Node = Union[Package, Type, Method]


def owning_package(node: Node) -> Package:
    """Return the package a node belongs to (a package belongs to itself)."""
    if isinstance(node, Package):
        return node
    return node.package


class Filter(Protocol):
    """Predicate over a package, type or method."""

    def accept(self, node: Node) -> bool: ...


class PackageFilter:
    """Whitelist of package names.

    Types and methods are judged by their owning package. An empty whitelist
    rejects every node.
    """

    def __init__(self, allowed_names: Iterable[str]):
        self.allowed_names = frozenset(allowed_names)

    def accept(self, node: Node) -> bool:
        return owning_package(node).name in self.allowed_names

    def __repr__(self) -> str:
        return f"PackageFilter({sorted(self.allowed_names)!r})"


class FilterCollection:
    """Ordered filters combined by logical AND; an empty collection accepts all."""

    def __init__(self, filters: Iterable[Filter] = ()):
        self._lock = threading.Lock()
        self._filters: tuple[Filter, ...] = tuple(filters)

    def add_filter(self, node_filter: Filter) -> None:
        with self._lock:
            self._filters = self._filters + (node_filter,)

    def clear(self) -> None:
        with self._lock:
            self._filters = ()

    def snapshot(self) -> FrozenFilterCollection:
        """Immutable copy of the current chain, used for one analysis run."""
        with self._lock:
            return FrozenFilterCollection(self._filters)

    def accept(self, node: Node) -> bool:
        with self._lock:
            filters = self._filters
        return all(f.accept(node) for f in filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._filters)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._filters)!r})"


class FrozenFilterCollection(FilterCollection):
    """A FilterCollection that refuses mutation."""

    def add_filter(self, node_filter: Filter) -> None:
        raise TypeError("cannot add filters to a snapshot")

    def clear(self) -> None:
        raise TypeError("cannot clear a snapshot")

    def snapshot(self) -> FrozenFilterCollection:
        return self

    def accept(self, node: Node) -> bool:
        return all(f.accept(node) for f in self._filters)
