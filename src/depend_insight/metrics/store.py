"""MetricStore - per-node and per-project metric rows owned by one analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

Number = Union[int, float]


@dataclass
class MetricStore:
    """Metric rows keyed by stable node id, plus a single project row.

    ``project_defaults`` is the row returned before any analysis and after
    an analysis of nothing.
    """

    project_defaults: dict[str, Number] = field(default_factory=dict)
    nodes: dict[int, dict[str, Number]] = field(default_factory=dict)
    project: dict[str, Number] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.project:
            self.project = dict(self.project_defaults)

    def reset(self) -> None:
        self.nodes = {}
        self.project = dict(self.project_defaults)

    def set_node(self, node_id: int, metrics: dict[str, Number]) -> None:
        self.nodes[node_id] = dict(metrics)

    def get_node(self, node_id: int) -> dict[str, Number]:
        """Copy of the node row, empty if the node was never visited."""
        return dict(self.nodes.get(node_id, {}))

    def set_project(self, metrics: dict[str, Number]) -> None:
        self.project = {**self.project_defaults, **metrics}

    def get_project(self) -> dict[str, Number]:
        return dict(self.project)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)
