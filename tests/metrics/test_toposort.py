"""Tests for graphlib-based topological sorting of analyzers."""

import pytest

from depend_insight.metrics.toposort import (
    AnalyzerCycleError,
    SlotCollisionError,
    resolve_analyzer_order,
    slot_owners,
)


class MockAnalyzer:
    """Mock analyzer for testing."""

    def __init__(self, name: str, requires: set[str] | None = None, provides: set[str] | None = None):
        self.name = name
        self.requires = requires or set()
        self.provides = provides or set()

    def analyze(self, packages):
        pass


class TestResolveAnalyzerOrder:
    """Test topological sorting of analyzers."""

    def test_empty_list(self):
        assert resolve_analyzer_order([]) == []

    def test_independent_analyzers(self):
        a = MockAnalyzer("a", provides={"slot_a"})
        b = MockAnalyzer("b", provides={"slot_b"})
        assert set(resolve_analyzer_order([a, b])) == {a, b}

    def test_chain_dependency(self):
        """Chain of dependencies: a -> b -> c."""
        a = MockAnalyzer("a", provides={"slot_a"})
        b = MockAnalyzer("b", requires={"slot_a"}, provides={"slot_b"})
        c = MockAnalyzer("c", requires={"slot_b"}, provides={"slot_c"})
        result = resolve_analyzer_order([c, a, b])
        assert result.index(a) < result.index(b) < result.index(c)

    def test_unprovided_requirement_still_listed(self):
        a = MockAnalyzer("a", requires={"nobody"})
        assert resolve_analyzer_order([a]) == [a]

    def test_slot_collision(self):
        a = MockAnalyzer("a", provides={"inheritance"})
        b = MockAnalyzer("b", provides={"inheritance"})
        with pytest.raises(SlotCollisionError, match="inheritance"):
            resolve_analyzer_order([a, b])

    def test_cycle(self):
        a = MockAnalyzer("a", requires={"slot_b"}, provides={"slot_a"})
        b = MockAnalyzer("b", requires={"slot_a"}, provides={"slot_b"})
        with pytest.raises(AnalyzerCycleError):
            resolve_analyzer_order([a, b])

    def test_ready_analyzers_keep_input_order(self):
        inheritance = MockAnalyzer("inheritance", provides={"inheritance"})
        coupling = MockAnalyzer("coupling", provides={"coupling"})
        summary = MockAnalyzer("summary", requires={"inheritance", "coupling"})
        report = MockAnalyzer("report", requires={"inheritance"})
        result = resolve_analyzer_order([summary, coupling, report, inheritance])
        assert [a.name for a in result] == ["coupling", "inheritance", "summary", "report"]

    def test_cycle_names_members(self):
        a = MockAnalyzer("a", requires={"slot_b"}, provides={"slot_a"})
        b = MockAnalyzer("b", requires={"slot_a"}, provides={"slot_b"})
        with pytest.raises(AnalyzerCycleError, match="a -> b|b -> a"):
            resolve_analyzer_order([a, b])

    def test_self_requirement_is_a_cycle(self):
        a = MockAnalyzer("a", requires={"slot_a"}, provides={"slot_a"})
        with pytest.raises(AnalyzerCycleError):
            resolve_analyzer_order([a])


class TestSlotOwners:
    def test_maps_slots_to_names(self):
        a = MockAnalyzer("inheritance", provides={"inheritance", "hierarchy"})
        assert slot_owners([a]) == {"hierarchy": "inheritance", "inheritance": "inheritance"}
