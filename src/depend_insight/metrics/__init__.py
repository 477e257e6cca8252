"""Metric analyzers and the contract they share."""

from .base import AbstractAnalyzer, Analyzer
from .inheritance import AnalyzerState, InheritanceAnalyzer, walk_parents
from .runner import AnalysisRunner, AnalyzerTimeoutError
from .store import MetricStore
from .toposort import AnalyzerCycleError, SlotCollisionError, resolve_analyzer_order

__all__ = [
    "AbstractAnalyzer",
    "AnalysisRunner",
    "Analyzer",
    "AnalyzerCycleError",
    "AnalyzerState",
    "AnalyzerTimeoutError",
    "InheritanceAnalyzer",
    "MetricStore",
    "SlotCollisionError",
    "resolve_analyzer_order",
    "walk_parents",
]
