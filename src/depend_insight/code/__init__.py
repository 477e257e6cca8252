"""Code model: registry, packages, types, filters and traversal."""

from .filters import Filter, FilterCollection, FrozenFilterCollection, PackageFilter
from .iterator import NodeIterator, iter_types
from .loader import load_registry, load_registry_file
from .models import Method, NodeKind, Package, Type
from .registry import CodeRegistry

__all__ = [
    "CodeRegistry",
    "Filter",
    "FilterCollection",
    "FrozenFilterCollection",
    "Method",
    "NodeIterator",
    "NodeKind",
    "Package",
    "PackageFilter",
    "Type",
    "iter_types",
    "load_registry",
    "load_registry_file",
]
