# src/waveplan/core/dag/scheduler.py
"""Wave-based build ordering over a wired DependencyGraph.

Units with no declared dependencies form wave 0. Each following wave is
collected from the dependents of the wave just emitted; a dependent is
admitted once all of its prerequisites have been emitted, so every edge
(A unblocks B) satisfies wave(A) < wave(B). Within a wave, units keep
their original input order.
"""

from __future__ import annotations

from dataclasses import dataclass

from waveplan.contracts import Diagnostic, DiagnosticCode, ProjectReference, UnitID
from waveplan.core.dag.graph import DependencyGraph
from waveplan.core.dag.models import CyclicDependencyError, GraphNode, InconsistentGraphError
from waveplan.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Schedule:
    """Ordered references and whether leveling was needed."""

    references: tuple[ProjectReference, ...]
    leveled: bool


class BuildOrderScheduler:
    """Assigns build-order waves to every node of a graph."""

    def schedule(self, graph: DependencyGraph) -> Schedule:
        """Produce the ordered reference list for graph.

        When no node declares a dependency the leveled traversal is
        skipped and every unit lands in wave 0.

        Raises:
            CyclicDependencyError: A unit is revisited, or unreachable units form a cycle.
            InconsistentGraphError: A unit is unreachable without any cycle.
        """
        nodes = graph.nodes()
        if not any(node.has_dependencies for node in nodes):
            return Schedule(
                references=tuple(ProjectReference.for_unit(node.unit, 0) for node in nodes),
                leveled=False,
            )
        return Schedule(references=tuple(self._level(graph, nodes)), leveled=True)

    def _level(self, graph: DependencyGraph, nodes: list[GraphNode]) -> list[ProjectReference]:
        visited: set[UnitID] = set()
        references: list[ProjectReference] = []
        wave = [node for node in nodes if not node.has_dependencies]
        build_order = 0

        while wave:
            for node in wave:
                if node.identity in visited:
                    raise self._cycle(node.name, node.identity)
                visited.add(node.identity)

            current = sorted(wave, key=lambda node: node.original_order)
            references.extend(ProjectReference.for_unit(node.unit, build_order) for node in current)

            candidates: dict[UnitID, GraphNode] = {}
            for node in current:
                for dependent in graph.dependents(node.identity):
                    candidates.setdefault(dependent.identity, dependent)

            wave = []
            for candidate in candidates.values():
                # A visited candidate is revisited: leave it in the wave for the cycle check
                if candidate.identity in visited or graph.prerequisites(candidate.identity) <= visited:
                    wave.append(candidate)
            build_order += 1

        unvisited = [node for node in nodes if node.identity not in visited]
        if unvisited:
            cycle = graph.find_cycle(node.identity for node in unvisited)
            if cycle is not None:
                first = graph.get_node(cycle[0])
                raise self._cycle(first.name, first.identity)
            names = ", ".join(f"'{node.name}'" for node in unvisited)
            logger.error("inconsistent_graph", units=[node.name for node in unvisited])
            raise InconsistentGraphError(
                f"Units never reached while ordering the build: {names}",
                [
                    Diagnostic.error(
                        DiagnosticCode.INCONSISTENT_GRAPH,
                        f"Project '{node.name}' was never scheduled although no cycle was found",
                        unit_name=node.name,
                        identity=node.identity,
                    )
                    for node in unvisited
                ],
            )

        logger.debug("build_waves_computed", waves=build_order, units=len(references))
        return references

    @staticmethod
    def _cycle(unit_name: str, identity: UnitID) -> CyclicDependencyError:
        logger.error("cyclic_dependency", unit=unit_name)
        diagnostic = Diagnostic.error(
            DiagnosticCode.CYCLIC_DEPENDENCY,
            f"Cyclic dependency detected for project '{unit_name}'",
            unit_name=unit_name,
            identity=identity,
        )
        return CyclicDependencyError(unit_name, [diagnostic])
