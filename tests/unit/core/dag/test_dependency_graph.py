# tests/unit/core/dag/test_dependency_graph.py
"""Tests for DependencyGraph construction and queries."""

from __future__ import annotations

import networkx as nx
import pytest

from waveplan.core.dag import DependencyGraph, DuplicateUnitError, GraphNode
from tests.conftest import make_unit, modern_result


def _graph(*names: str) -> DependencyGraph:
    units = [make_unit(f"{name}.proj", order) for order, name in enumerate(names)]
    return DependencyGraph.from_units(units, [modern_result() for _ in units])


class TestDependencyGraph:
    """Node and edge bookkeeping."""

    def test_nodes_follow_original_order(self) -> None:
        graph = _graph("C", "A", "B")
        assert [node.name for node in graph.nodes()] == ["C", "A", "B"]
        assert graph.node_count == 3
        assert len(graph) == 3

    def test_duplicate_identity_rejected(self) -> None:
        units = [make_unit("A.proj", 0), make_unit("./A.proj", 1)]
        with pytest.raises(DuplicateUnitError, match="more than once"):
            DependencyGraph.from_units(units, [modern_result(), modern_result()])

    def test_misaligned_results_rejected(self) -> None:
        with pytest.raises(ValueError, match="evaluation results"):
            DependencyGraph.from_units([make_unit("A.proj", 0)], [])

    def test_dependents_and_prerequisites(self) -> None:
        graph = _graph("A", "B", "C")
        a, b, c = (node.identity for node in graph.nodes())
        graph.add_dependent(a, c)
        graph.add_dependent(a, b)
        graph.add_dependent(a, b)

        assert [node.name for node in graph.dependents(a)] == ["B", "C"]
        assert graph.prerequisites(c) == {a}
        assert graph.edge_count == 2

    def test_remove_node_drops_edges(self) -> None:
        graph = _graph("A", "B")
        a, b = (node.identity for node in graph.nodes())
        graph.add_dependent(a, b)

        graph.remove_node(a)

        assert a not in graph
        assert graph.prerequisites(b) == set()
        assert graph.edge_count == 0

    def test_find_cycle(self) -> None:
        graph = _graph("A", "B", "C")
        a, b, c = (node.identity for node in graph.nodes())
        graph.add_dependent(a, b)
        assert graph.find_cycle() is None

        graph.add_dependent(b, a)
        assert set(graph.find_cycle() or []) == {a, b}
        assert graph.find_cycle([c]) is None

    def test_nx_graph_is_frozen_copy(self) -> None:
        graph = _graph("A")
        frozen = graph.get_nx_graph()
        with pytest.raises(nx.NetworkXError):
            frozen.add_node("x")

    def test_has_dependencies_flag(self) -> None:
        plain = GraphNode(unit=make_unit("A.proj", 0), compatibility=modern_result())
        declared = GraphNode(unit=make_unit("B.proj", 1, depends_on="A"), compatibility=modern_result())
        structural = GraphNode(unit=make_unit("C.proj", 2), compatibility=modern_result(references=["A.proj"]))

        assert not plain.has_dependencies
        assert declared.has_dependencies
        assert structural.has_dependencies
