"""Analyzer contract shared by every metric family."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterable, Optional, Protocol

from ..code.filters import FilterCollection
from ..code.models import Package, Type
from ..exceptions import InvalidAnalyzerInputError, UnsupportedNodeError
from .store import MetricStore, Number


class Analyzer(Protocol):
    """Analyzers consume packages and answer node and project metric queries."""

    name: str
    requires: set[str]  # slots that must be provided by earlier analyzers
    provides: set[str]  # slots this analyzer makes available

    def analyze(self, packages: Iterable[Package]) -> None: ...

    def get_node_metrics(self, node: Any) -> dict[str, Number]: ...

    def get_project_metrics(self) -> dict[str, Number]: ...


class AbstractAnalyzer(ABC):
    """Base class wiring the metric store, filters and dependencies together.

    Subclasses implement ``_compute`` over a tuple of packages; the base
    class validates input, resets the store and snapshots the filters so
    every ``analyze`` call starts from scratch.
    """

    name: ClassVar[str] = "abstract"
    requires: ClassVar[set[str]] = set()
    provides: ClassVar[set[str]] = set()
    project_defaults: ClassVar[dict[str, Number]] = {}

    def __init__(self, filters: Optional[FilterCollection] = None):
        self.filters = filters if filters is not None else FilterCollection()
        self.store = MetricStore(project_defaults=dict(self.project_defaults))
        self.dependencies: dict[str, Analyzer] = {}

    def add_dependency(self, slot: str, analyzer: Analyzer) -> None:
        """Make the results of another analyzer available under *slot*."""
        self.dependencies[slot] = analyzer

    def analyze(self, packages: Optional[Iterable[Package]]) -> None:
        if packages is None:
            raise InvalidAnalyzerInputError(self.name, "packages must be a collection, got None")
        self.store.reset()
        self._compute(tuple(packages), self.filters.snapshot())

    @abstractmethod
    def _compute(self, packages: tuple[Package, ...], filters: FilterCollection) -> None:
        """Populate ``self.store`` from *packages*."""
        pass

    def get_node_metrics(self, node: Any) -> dict[str, Number]:
        if not isinstance(node, Type):
            raise UnsupportedNodeError(self.name, node)
        return self.store.get_node(node.id)

    def get_project_metrics(self) -> dict[str, Number]:
        return self.store.get_project()
