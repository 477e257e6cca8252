"""Restartable, filter-aware traversal over packages and types."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, TypeVar

from .filters import FilterCollection
from .models import Package, Type

T = TypeVar("T")


class NodeIterator(Generic[T]):
    """Lazy sequence of nodes accepted by a filter collection.

    The node list is copied into a tuple at construction. Every ``iter()``
    call starts an independent generator over that tuple, so a traversal can
    be restarted any number of times without shared cursor state.
    """

    def __init__(self, nodes: Iterable[T], filters: Optional[FilterCollection] = None):
        self._nodes: tuple[T, ...] = tuple(nodes)
        self._filters = filters

    def __iter__(self) -> Iterator[T]:
        filters = self._filters
        for node in self._nodes:
            if filters is None or filters.accept(node):
                yield node

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def first(self) -> Optional[T]:
        return next(iter(self), None)


def iter_types(
    packages: Iterable[Package], filters: Optional[FilterCollection] = None
) -> NodeIterator[Type]:
    """Accepted types of accepted packages, in package then declaration order."""
    accepted_packages = NodeIterator(packages, filters)
    return NodeIterator(
        (node for package in accepted_packages for node in package.get_types()),
        filters,
    )
