"""
Depend Insight - inheritance metrics over an in-memory code model

Builds a registry of packages, classes and interfaces, filters it, and runs
metric analyzers (Depth of Inheritance Tree, Number of Children, Average
Number of Derived Classes, Average Hierarchy Height) over the result.
"""

__version__ = "0.1.0"

from .code import CodeRegistry, FilterCollection, NodeIterator, PackageFilter
from .metrics import AnalysisRunner, InheritanceAnalyzer

__all__ = [
    "AnalysisRunner",
    "CodeRegistry",
    "FilterCollection",
    "InheritanceAnalyzer",
    "NodeIterator",
    "PackageFilter",
]
