# src/waveplan/core/compatibility.py
"""Configuration/platform compatibility filtering.

Units that cannot build under their requested configuration/platform are
removed from the graph before any edge is resolved, so no edge can ever
point at a skipped unit. A skip is informational; anything that depended
on the skipped unit fails later as an unresolved dependency.
"""

from __future__ import annotations

from waveplan.contracts import Diagnostic, DiagnosticCode
from waveplan.core.dag.graph import DependencyGraph
from waveplan.core.logging import get_logger

logger = get_logger(__name__)


class CompatibilityResolver:
    """Removes units that are incompatible with the active build configuration."""

    def filter(self, graph: DependencyGraph) -> list[Diagnostic]:
        """Remove skipped units from graph.

        Returns:
            One informational diagnostic per removed unit, in input order.
        """
        skipped: list[Diagnostic] = []
        for node in graph.nodes():
            unit = node.unit
            if not node.compatibility.should_skip(unit.configuration, unit.platform):
                continue

            logger.info(
                "unit_skipped",
                unit=unit.name,
                identity=unit.identity,
                configuration=unit.configuration,
                platform=unit.platform,
            )
            skipped.append(
                Diagnostic.info(
                    DiagnosticCode.UNIT_SKIPPED,
                    f"Skipped project '{unit.name}' due to unsupported configuration or platform",
                    unit_name=unit.name,
                    identity=unit.identity,
                )
            )
            graph.remove_node(unit.identity)
        return skipped
