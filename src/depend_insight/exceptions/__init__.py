"""Exception hierarchy for Depend Insight."""

from .analysis import (
    AnalysisError,
    DuplicateTypeError,
    InvalidAnalyzerInputError,
    InvalidGraphError,
    UnsupportedNodeError,
)
from .base import DependInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "DependInsightError",
    "AnalysisError",
    "DuplicateTypeError",
    "InvalidAnalyzerInputError",
    "InvalidGraphError",
    "UnsupportedNodeError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
