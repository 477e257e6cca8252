"""Inheritance metrics: DIT, NOC, NOAM, NOOM per class; ANDC, AHH, MAX_DIT per project.

Per-class metrics (accepted classes only, walked over the full graph):
- dit:  Depth of Inheritance Tree, parent-class hops to the hierarchy root
- noc:  Number of Children, classes whose parent is this class
- noam: Number of Added Methods, methods no ancestor declares
- noom: Number of Overridden Methods, methods some ancestor declares

Project metrics (over accepted classes, interfaces excluded):
- andc:    Average Number of Derived Classes
- ahh:     Average Hierarchy Height
- max_dit: deepest DIT seen

Two conventions exist for the averages. The defaults average NOC over
classes that have children and DIT over every class. PHP_Depend divides the
total NOC by the number of classes and averages, per hierarchy root, the
deepest DIT found below it; select it with ``andc_denominator="classes"``
and ``ahh_reference="roots"``.
"""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Hashable, Literal, Optional

import numpy as np

from ..code.filters import FilterCollection
from ..code.iterator import iter_types
from ..code.models import Package, Type
from ..exceptions import InvalidConfigError
from ..exceptions.taxonomy import ErrorCode, FilterError, TraversalError
from ..logging_config import get_logger
from .base import AbstractAnalyzer

if TYPE_CHECKING:
    from ..config import AnalysisConfig

logger = get_logger(__name__)

AndcDenominator = Literal["parents", "classes"]
AhhReference = Literal["classes", "roots"]

M_DEPTH_OF_INHERITANCE_TREE = "dit"
M_NUMBER_OF_CHILDREN = "noc"
M_NUMBER_OF_ADDED_METHODS = "noam"
M_NUMBER_OF_OVERRIDDEN_METHODS = "noom"
M_AVERAGE_NUMBER_OF_DERIVED_CLASSES = "andc"
M_AVERAGE_HIERARCHY_HEIGHT = "ahh"
M_MAXIMUM_DIT = "max_dit"


class AnalyzerState(Enum):
    """Phases of one ``analyze`` call."""

    IDLE = "idle"
    VISITING = "visiting"
    AGGREGATING = "aggregating"
    DONE = "done"


@dataclass
class InheritanceWalk:
    """Result of following the parent-class chain of one class."""

    depth: int = 0
    root: Hashable = None  # ("type", id) or ("unresolved", name)
    ancestors: list[Type] = field(default_factory=list)
    cycle: bool = False


def walk_parents(node: Type) -> InheritanceWalk:
    """Follow parent-class edges from *node* until a root, an unresolved parent or a cycle.

    An unresolved parent counts as one more hop and ends the walk. On a
    repeated node the walk stops at the depth reached so far.
    """
    walk = InheritanceWalk(root=("type", node.id))
    seen = {node.id}
    current = node

    while current.has_parent_class():
        parent = current.get_parent_class()
        if parent is None:
            walk.depth += 1
            walk.root = ("unresolved", current.parent_ref)
            break
        if parent.id in seen:
            walk.cycle = True
            break
        seen.add(parent.id)
        walk.depth += 1
        walk.ancestors.append(parent)
        walk.root = ("type", parent.id)
        current = parent

    return walk


class InheritanceAnalyzer(AbstractAnalyzer):
    """Computes inheritance metrics over the classes accepted by the filters."""

    name = "inheritance"
    requires: set[str] = set()
    provides: set[str] = {"inheritance"}
    project_defaults = {
        M_AVERAGE_NUMBER_OF_DERIVED_CLASSES: 0.0,
        M_AVERAGE_HIERARCHY_HEIGHT: 0.0,
        M_MAXIMUM_DIT: 0,
    }

    def __init__(
        self,
        filters: Optional[FilterCollection] = None,
        andc_denominator: AndcDenominator = "parents",
        ahh_reference: AhhReference = "classes",
        workers: Optional[int] = None,
    ):
        super().__init__(filters)
        if andc_denominator not in ("parents", "classes"):
            raise InvalidConfigError(
                "andc_denominator", andc_denominator, "expected 'parents' or 'classes'"
            )
        if ahh_reference not in ("classes", "roots"):
            raise InvalidConfigError("ahh_reference", ahh_reference, "expected 'classes' or 'roots'")
        if workers is not None and workers < 1:
            raise InvalidConfigError("workers", workers, "must be at least 1")

        self.andc_denominator = andc_denominator
        self.ahh_reference = ahh_reference
        self.workers = workers
        self.state = AnalyzerState.IDLE
        self.diagnostics: list[TraversalError] = []

    @classmethod
    def from_config(
        cls, config: AnalysisConfig, filters: Optional[FilterCollection] = None
    ) -> InheritanceAnalyzer:
        return cls(
            filters=filters if filters is not None else config.build_filters(),
            andc_denominator=config.andc_denominator,
            ahh_reference=config.ahh_reference,
            workers=config.workers,
        )

    def _compute(self, packages: tuple[Package, ...], filters: FilterCollection) -> None:
        self.diagnostics = []

        # Children are counted over every class handed in, filtered or not
        all_classes = [t for package in packages for t in package.get_types() if t.is_class]
        children = Counter(t.parent_id for t in all_classes if t.parent_id is not None)

        accepted = [t for t in iter_types(packages, filters) if t.is_class]
        logger.debug(f"{len(accepted)} of {len(all_classes)} classes accepted")
        if all_classes and not accepted:
            error = FilterError(
                message=f"Filters {filters!r} reject all {len(all_classes)} classes",
                code=ErrorCode.DI200,
                context={"filters": repr(filters)},
            )
            logger.warning(str(error))

        self.state = AnalyzerState.VISITING
        walks = self._visit_all(accepted)

        for node, walk in zip(accepted, walks):
            self._record_walk_anomalies(node, walk)
            noam, noom = _count_added_and_overridden(node, walk.ancestors)
            self.store.set_node(
                node.id,
                {
                    M_DEPTH_OF_INHERITANCE_TREE: walk.depth,
                    M_NUMBER_OF_CHILDREN: children[node.id],
                    M_NUMBER_OF_ADDED_METHODS: noam,
                    M_NUMBER_OF_OVERRIDDEN_METHODS: noom,
                },
            )

        self.state = AnalyzerState.AGGREGATING
        if accepted:
            self.store.set_project(
                {
                    M_AVERAGE_NUMBER_OF_DERIVED_CLASSES: self._andc(
                        [children[t.id] for t in accepted]
                    ),
                    M_AVERAGE_HIERARCHY_HEIGHT: self._ahh(walks),
                    M_MAXIMUM_DIT: max(w.depth for w in walks),
                }
            )

        self.state = AnalyzerState.DONE
        logger.debug(f"Inheritance analysis complete: {self.store.get_project()}")

    def _visit_all(self, accepted: list[Type]) -> list[InheritanceWalk]:
        if self.workers and self.workers > 1 and len(accepted) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                return list(executor.map(walk_parents, accepted))
        return [walk_parents(node) for node in accepted]

    def _record_walk_anomalies(self, node: Type, walk: InheritanceWalk) -> None:
        if walk.cycle:
            error = TraversalError(
                message=f"Inheritance cycle reached from {node.qualified_name}",
                code=ErrorCode.DI301,
                context={"type": node.qualified_name, "depth": walk.depth},
                recovery_hint="DIT truncated at the first repeated class",
            )
            self.diagnostics.append(error)
            logger.warning(f"{error} (dit={walk.depth})")
        elif walk.root is not None and walk.root[0] == "unresolved":
            logger.debug(
                f"[{ErrorCode.DI300.value}] {node.qualified_name}: "
                f"hierarchy ends at unresolved parent '{walk.root[1]}'"
            )

    def _andc(self, child_counts: list[int]) -> float:
        if self.andc_denominator == "classes":
            return float(np.sum(child_counts) / len(child_counts))
        with_children = [c for c in child_counts if c > 0]
        if not with_children:
            return 0.0
        return float(np.mean(with_children))

    def _ahh(self, walks: list[InheritanceWalk]) -> float:
        if self.ahh_reference == "roots":
            heights: dict[Hashable, int] = {}
            for walk in walks:
                heights[walk.root] = max(heights.get(walk.root, 0), walk.depth)
            return float(np.mean(list(heights.values())))
        return float(np.mean([walk.depth for walk in walks]))


def _count_added_and_overridden(node: Type, ancestors: list[Type]) -> tuple[int, int]:
    inherited = {m.name for ancestor in ancestors for m in ancestor.methods}
    overridden = sum(1 for m in node.methods if m.name in inherited)
    return len(node.methods) - overridden, overridden
