"""Tests for the error taxonomy and exception hierarchy."""

import pytest

from depend_insight.exceptions import (
    AnalysisError,
    ConfigurationError,
    DependInsightError,
    DuplicateTypeError,
    InvalidConfigError,
    InvalidGraphError,
    UnsupportedNodeError,
)
from depend_insight.exceptions.taxonomy import (
    AnalyzerError,
    ConfigError,
    DependError,
    ErrorCode,
    FilterError,
    ModelError,
    TraversalError,
)


class TestErrorCode:
    """Test ErrorCode enum."""

    def test_codes_are_grouped_by_hundreds(self):
        groups = {code.value[:3] for code in ErrorCode}
        assert groups == {"DI1", "DI2", "DI3", "DI4", "DI5"}

    def test_values_match_names(self):
        assert all(code.name == code.value for code in ErrorCode)


class TestDependError:
    """Test structured exceptions."""

    def test_str_includes_code(self):
        error = TraversalError(message="Inheritance cycle reached from p.X", code=ErrorCode.DI301)
        assert str(error) == "[DI301] Inheritance cycle reached from p.X"

    def test_to_json(self):
        error = ModelError(
            message="Unresolved reference 'Ext' in p.A",
            code=ErrorCode.DI101,
            context={"type": "p.A", "reference": "Ext"},
            recovery_hint="Treated as an external type",
        )
        assert error.to_json() == {
            "error_code": "DI101",
            "message": "Unresolved reference 'Ext' in p.A",
            "context": {"type": "p.A", "reference": "Ext"},
            "recoverable": True,
            "recovery_hint": "Treated as an external type",
        }

    @pytest.mark.parametrize("cls", [ModelError, FilterError, TraversalError, AnalyzerError, ConfigError])
    def test_subclasses_are_raisable(self, cls):
        with pytest.raises(DependError) as exc:
            raise cls(message="x", code=ErrorCode.DI400)
        assert isinstance(exc.value, Exception)


class TestExceptionHierarchy:
    """Test DependInsightError subclasses."""

    def test_details_in_str(self):
        error = DuplicateTypeError("p.A")
        assert str(error) == "Type already registered: p.A (qualified_name=p.A)"
        assert isinstance(error, AnalysisError)
        assert isinstance(error, DependInsightError)

    def test_invalid_graph_location_optional(self):
        assert "location" not in InvalidGraphError("bad").details
        assert InvalidGraphError("bad", location="packages[0]").details["location"] == "packages[0]"

    def test_unsupported_node_names_type(self):
        error = UnsupportedNodeError("inheritance", 42)
        assert error.details == {"analyzer": "inheritance", "node_type": "int"}

    def test_invalid_config_is_configuration_error(self):
        error = InvalidConfigError("workers", 0, "must be at least 1")
        assert isinstance(error, ConfigurationError)
        assert error.details["value"] == "0"
