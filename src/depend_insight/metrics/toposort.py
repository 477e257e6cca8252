"""Dependency ordering of analyzers by the metric slots they exchange.

An analyzer ``provides`` slots (``"inheritance"``) and ``requires`` slots that
another analyzer must fill first. Each slot has one owner. The order is
deterministic: among analyzers whose requirements are met, the one listed
first goes first, so repeated runs log and report in the same sequence.
"""

from __future__ import annotations

from graphlib import CycleError, TopologicalSorter
from typing import Any


class SlotCollisionError(ValueError):
    """Raised when multiple analyzers provide the same slot."""

    pass


class AnalyzerCycleError(ValueError):
    """Raised when analyzer dependencies form a cycle."""

    pass


def slot_owners(analyzers: list[Any]) -> dict[str, str]:
    """Map each provided slot to the name of the analyzer providing it."""
    owners: dict[str, str] = {}
    for analyzer in analyzers:
        for slot in sorted(getattr(analyzer, "provides", set())):
            if slot in owners:
                raise SlotCollisionError(
                    f"Slot '{slot}' provided by both '{owners[slot]}' and '{analyzer.name}'"
                )
            owners[slot] = analyzer.name
    return owners


def resolve_analyzer_order(analyzers: list[Any]) -> list[Any]:
    """Order analyzers so every provider runs before the analyzers requiring it.

    Requirements no analyzer provides add no edge; the runner skips those
    analyzers when their turn comes.

    Raises:
        SlotCollisionError: If two analyzers provide the same slot
        AnalyzerCycleError: If the requirements form a cycle
    """
    owners = slot_owners(analyzers)
    by_name = {analyzer.name: analyzer for analyzer in analyzers}
    position = {name: i for i, name in enumerate(by_name)}

    sorter: TopologicalSorter[str] = TopologicalSorter()
    for analyzer in analyzers:
        providers = {owners[slot] for slot in getattr(analyzer, "requires", set()) if slot in owners}
        sorter.add(analyzer.name, *providers)

    try:
        sorter.prepare()
    except CycleError as e:
        names = " -> ".join(e.args[1])
        raise AnalyzerCycleError(f"Analyzer dependency cycle: {names}") from e

    order: list[Any] = []
    while sorter.is_active():
        ready = sorted(sorter.get_ready(), key=position.__getitem__)
        order.extend(by_name[name] for name in ready)
        sorter.done(*ready)
    return order
