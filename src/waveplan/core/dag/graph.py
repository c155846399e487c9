# src/waveplan/core/dag/graph.py
"""DependencyGraph: the surviving units and their "unblocks" edges.

Wraps a NetworkX DiGraph keyed by unit identity. Edges point from the
depended-upon unit to its dependent ("build me, then build my
dependents"). Nodes hold no references to each other; adjacency lives
in the one graph table.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import networkx as nx
from networkx import DiGraph

from waveplan.contracts import CompatibilityResult, UnitDescriptor, UnitID
from waveplan.core.dag.models import DuplicateUnitError, GraphNode


class DependencyGraph:
    """Graph of build units for one scheduling request.

    Built, filtered, wired and discarded within a single run.
    """

    def __init__(self) -> None:
        self._graph: DiGraph[str] = nx.DiGraph()

    @classmethod
    def from_units(
        cls,
        units: Sequence[UnitDescriptor],
        results: Sequence[CompatibilityResult],
    ) -> DependencyGraph:
        """Create a graph with one node per unit and no edges yet.

        Raises:
            DuplicateUnitError: If two units share an identity.
            ValueError: If units and results are not index-aligned.
        """
        if len(units) != len(results):
            raise ValueError(f"Got {len(results)} evaluation results for {len(units)} units")
        graph = cls()
        for unit, result in zip(units, results, strict=True):
            graph.add_node(GraphNode(unit=unit, compatibility=result))
        return graph

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, identity: object) -> bool:
        return self._graph.has_node(identity)

    def has_node(self, identity: str) -> bool:
        return self._graph.has_node(identity)

    def add_node(self, node: GraphNode) -> None:
        """Add a unit node.

        Raises:
            DuplicateUnitError: If a node with the same identity exists.
        """
        if self._graph.has_node(node.identity):
            raise DuplicateUnitError(f"Unit '{node.identity}' appears more than once in the input")
        self._graph.add_node(node.identity, info=node)

    def remove_node(self, identity: UnitID) -> None:
        """Remove a node and any edges touching it."""
        self._graph.remove_node(identity)

    def get_node(self, identity: UnitID) -> GraphNode:
        """Return the node for identity.

        Raises:
            KeyError: If the unit is not in the graph.
        """
        info: GraphNode = self._graph.nodes[identity]["info"]
        return info

    def nodes(self) -> list[GraphNode]:
        """All nodes, in original input order."""
        return sorted((data["info"] for _, data in self._graph.nodes(data=True)), key=lambda node: node.original_order)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes())

    def add_dependent(self, target: UnitID, dependent: UnitID) -> None:
        """Record that dependent must build after target.

        Adding the same edge twice is a no-op.
        """
        self._graph.add_edge(target, dependent)

    def dependents(self, identity: UnitID) -> list[GraphNode]:
        """Units unblocked by identity, in original input order."""
        return sorted((self.get_node(UnitID(succ)) for succ in self._graph.successors(identity)), key=lambda node: node.original_order)

    def prerequisites(self, identity: UnitID) -> set[UnitID]:
        """Identities that must be built before identity."""
        return {UnitID(pred) for pred in self._graph.predecessors(identity)}

    def find_cycle(self, identities: Iterable[UnitID] | None = None) -> list[UnitID] | None:
        """Return the units on one cycle, or None if the (sub)graph is acyclic.

        Args:
            identities: Restrict the search to the subgraph induced by these
                units. None searches the whole graph.
        """
        graph = self._graph if identities is None else self._graph.subgraph(identities)
        try:
            cycle = nx.find_cycle(graph)
        except nx.NetworkXNoCycle:
            return None
        return [UnitID(edge[0]) for edge in cycle]

    def get_nx_graph(self) -> DiGraph[str]:
        """Return a frozen copy of the underlying NetworkX graph."""
        return nx.freeze(self._graph.copy())  # type: ignore[no-any-return]
