"""Analysis-related exceptions: graph shape, analyzer input, node lookups."""

from typing import Any, Optional

from .base import DependInsightError


class AnalysisError(DependInsightError):
    """Base class for analysis-related errors."""
    pass


class InvalidAnalyzerInputError(AnalysisError):
    """Raised when an analyzer receives no package collection at all."""

    def __init__(self, analyzer: str, reason: str):
        super().__init__(
            f"Invalid input for analyzer '{analyzer}'",
            details={"analyzer": analyzer, "reason": reason},
        )
        self.analyzer = analyzer
        self.reason = reason


class UnsupportedNodeError(AnalysisError):
    """Raised when metrics are requested for a node kind the analyzer doesn't track."""

    def __init__(self, analyzer: str, node: Any):
        node_type = type(node).__name__
        super().__init__(
            f"Analyzer '{analyzer}' does not track {node_type} nodes",
            details={"analyzer": analyzer, "node_type": node_type},
        )
        self.analyzer = analyzer
        self.node = node


class DuplicateTypeError(AnalysisError):
    """Raised when the same qualified type name is registered twice."""

    def __init__(self, qualified_name: str):
        super().__init__(
            f"Type already registered: {qualified_name}",
            details={"qualified_name": qualified_name},
        )
        self.qualified_name = qualified_name


class InvalidGraphError(AnalysisError):
    """Raised when a serialized graph document cannot be turned into a model."""

    def __init__(self, reason: str, location: Optional[str] = None):
        details = {"reason": reason}
        if location:
            details["location"] = location

        super().__init__(f"Invalid graph document: {reason}", details=details)
        self.reason = reason
        self.location = location
