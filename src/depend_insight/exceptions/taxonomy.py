"""Error taxonomy with error codes and recovery strategies.

Error Code Convention:
    DI1xx - Code model errors
    DI2xx - Filter errors
    DI3xx - Traversal errors
    DI4xx - Analyzer errors
    DI5xx - Configuration errors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured error codes for observability and debugging."""

    # Code model errors (DI1xx)
    DI100 = "DI100"  # Duplicate type registration
    DI101 = "DI101"  # Parent/interface reference unresolved

    # Filter errors (DI2xx)
    DI200 = "DI200"  # Filter rejects every node

    # Traversal errors (DI3xx)
    DI300 = "DI300"  # Inheritance walk hit unresolved parent
    DI301 = "DI301"  # Inheritance cycle detected

    # Analyzer errors (DI4xx)
    DI400 = "DI400"  # Required slot unavailable
    DI401 = "DI401"  # Analyzer raised during analyze()
    DI402 = "DI402"  # Analyzer timeout

    # Configuration errors (DI5xx)
    DI501 = "DI501"  # Unknown config key


@dataclass
class DependError(Exception):
    """Base exception with structured context for logging.

    Attributes:
        message: Human-readable error description
        code: Structured error code for categorization
        context: Additional context (type name, analyzer, etc.)
        recoverable: Whether the error can be recovered from
        recovery_hint: Suggested fix for the user
    """

    message: str
    code: ErrorCode
    context: dict[str, Any] = field(default_factory=dict)
    recoverable: bool = True
    recovery_hint: str | None = None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "recovery_hint": self.recovery_hint,
        }


class ModelError(DependError):
    """Errors while building the code model (DI1xx)."""

    pass


class FilterError(DependError):
    """Errors in filter configuration (DI2xx)."""

    pass


class TraversalError(DependError):
    """Anomalies found while walking inheritance edges (DI3xx)."""

    pass


class AnalyzerError(DependError):
    """Errors during analyzer execution (DI4xx)."""

    pass


class ConfigError(DependError):
    """Errors while loading configuration (DI5xx)."""

    pass
