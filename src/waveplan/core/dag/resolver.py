# src/waveplan/core/dag/resolver.py
"""Resolution of dependency declarations into graph edges.

Two independent sources feed edges:
- structural references reported by the evaluator, matched exactly
  against surviving unit identities;
- explicit DependsOn expressions, each a bare name, an absolute path,
  or a path relative to the base directory.

Every declaration of every unit is attempted. Outcomes are accumulated
in a ResolutionReport so one run reports all broken declarations; the
caller decides to abort once the full pass is done.
"""

from __future__ import annotations

import os
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from waveplan.contracts import Diagnostic, DiagnosticCode, RelativePathPolicy, UnitID, normalize_identity
from waveplan.core.dag.graph import DependencyGraph
from waveplan.core.dag.models import GraphNode
from waveplan.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one declaration: a target or a diagnostic."""

    dependent: UnitID
    expression: str
    target: UnitID | None = None
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.target is not None


@dataclass(frozen=True, slots=True)
class ResolutionReport:
    """All resolutions of one pass, successful or not."""

    resolutions: tuple[Resolution, ...]

    @property
    def ok(self) -> bool:
        return all(resolution.ok for resolution in self.resolutions)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(r.diagnostic for r in self.resolutions if r.diagnostic is not None)

    @property
    def edges(self) -> tuple[tuple[UnitID, UnitID], ...]:
        """(target, dependent) pairs for every successful resolution."""
        return tuple((r.target, r.dependent) for r in self.resolutions if r.target is not None)


def _posix(path: str) -> str:
    return path.replace("\\", "/")


class ReferenceResolver:
    """Turns declarations of surviving units into edges on the graph.

    The name table is built once from the graph as it stands after
    compatibility filtering and is read-only during resolution.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        *,
        base_directory: str | os.PathLike[str] | None = None,
        policy: RelativePathPolicy = RelativePathPolicy.SUFFIX,
    ) -> None:
        self._graph = graph
        self._base_directory = os.fspath(base_directory) if base_directory is not None else os.getcwd()
        self._policy = policy

        names: defaultdict[str, list[UnitID]] = defaultdict(list)
        for node in graph.nodes():
            names[node.name.casefold()].append(node.identity)
        self._names: Mapping[str, tuple[UnitID, ...]] = MappingProxyType({k: tuple(v) for k, v in names.items()})

    @property
    def name_table(self) -> Mapping[str, tuple[UnitID, ...]]:
        """Case-folded unit name -> identities sharing that name."""
        return self._names

    def resolve(self) -> ResolutionReport:
        """Resolve all declarations and record successful ones as edges.

        Structural references are resolved before DependsOn expressions,
        unit by unit in input order.
        """
        resolutions: list[Resolution] = []
        for node in self._graph.nodes():
            for reference in node.compatibility.structural_references:
                resolutions.append(self._resolve_reference(node, reference))
            for expression in node.unit.depends_on:
                resolutions.append(self._resolve_expression(node, expression))

        for resolution in resolutions:
            if resolution.target is not None:
                self._graph.add_dependent(resolution.target, resolution.dependent)
            elif resolution.diagnostic is not None:
                logger.error(
                    resolution.diagnostic.code.value,
                    unit=resolution.diagnostic.unit_name,
                    expression=resolution.expression,
                )

        return ResolutionReport(resolutions=tuple(resolutions))

    def _resolve_reference(self, node: GraphNode, reference: UnitID) -> Resolution:
        if reference in self._graph:
            return Resolution(dependent=node.identity, expression=reference, target=reference)
        return self._failure(
            node,
            reference,
            DiagnosticCode.UNRESOLVED_REFERENCE,
            f"The project reference has not been found in the solution ['{node.name}' -> '{reference}']",
        )

    def _is_bare_name(self, expression: str) -> bool:
        if "/" in expression or "\\" in expression:
            return False
        if expression.casefold() in self._names:
            return True
        return not os.path.splitext(expression)[1]

    def _resolve_expression(self, node: GraphNode, expression: str) -> Resolution:
        if self._is_bare_name(expression):
            candidates = self._names.get(expression.casefold(), ())
            if len(candidates) > 1:
                return self._failure(
                    node,
                    expression,
                    DiagnosticCode.AMBIGUOUS_DEPENDENCY,
                    "Ambiguous project name specified in DependsOn, an unambiguous project path "
                    f"must be specified ['{node.name}' -> '{expression}']",
                )
            if candidates:
                return Resolution(dependent=node.identity, expression=expression, target=candidates[0])
            return self._not_found(node, expression)

        path = _posix(expression)
        if os.path.isabs(path):
            identity = normalize_identity(path)
            if identity in self._graph:
                return Resolution(dependent=node.identity, expression=expression, target=identity)
            return self._not_found(node, expression)

        identity = normalize_identity(path, self._base_directory)
        if identity in self._graph:
            return Resolution(dependent=node.identity, expression=expression, target=identity)
        if self._policy == RelativePathPolicy.SUFFIX:
            return self._resolve_suffix(node, expression)
        return self._not_found(node, expression)

    def _resolve_suffix(self, node: GraphNode, expression: str) -> Resolution:
        suffix = _posix(os.path.normpath(_posix(expression))).casefold()
        if suffix.startswith(".."):
            return self._not_found(node, expression)

        matches = []
        for candidate in self._graph.nodes():
            identity = _posix(candidate.identity).casefold()
            if identity == suffix or identity.endswith("/" + suffix):
                matches.append(candidate.identity)

        if len(matches) > 1:
            return self._failure(
                node,
                expression,
                DiagnosticCode.AMBIGUOUS_DEPENDENCY,
                f"Ambiguous project path specified in DependsOn, it matches {len(matches)} projects "
                f"['{node.name}' -> '{expression}']",
            )
        if matches:
            return Resolution(dependent=node.identity, expression=expression, target=matches[0])
        return self._not_found(node, expression)

    def _not_found(self, node: GraphNode, expression: str) -> Resolution:
        return self._failure(
            node,
            expression,
            DiagnosticCode.UNRESOLVED_DEPENDENCY,
            f"The project specified in DependsOn has not been found in the solution ['{node.name}' -> '{expression}']",
        )

    def _failure(self, node: GraphNode, expression: str, code: DiagnosticCode, message: str) -> Resolution:
        diagnostic = Diagnostic.error(code, message, unit_name=node.name, identity=node.identity, expression=expression)
        return Resolution(dependent=node.identity, expression=expression, diagnostic=diagnostic)
