"""Status codes and kinds reported across subsystem boundaries."""

from enum import StrEnum


class Severity(StrEnum):
    """How a diagnostic affects the scheduling run."""

    INFO = "info"
    ERROR = "error"


class DiagnosticCode(StrEnum):
    """What a diagnostic is about.

    UNIT_SKIPPED is the only non-fatal code. INCONSISTENT_GRAPH is an
    internal invariant violation, not a user configuration problem.
    """

    UNIT_SKIPPED = "unit_skipped"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    UNRESOLVED_DEPENDENCY = "unresolved_dependency"
    AMBIGUOUS_DEPENDENCY = "ambiguous_dependency"
    CYCLIC_DEPENDENCY = "cyclic_dependency"
    INCONSISTENT_GRAPH = "inconsistent_graph"


class RelativePathPolicy(StrEnum):
    """How relative DependsOn paths are matched to units.

    EXACT: resolve against the base directory and match identity exactly.
    SUFFIX: as EXACT, falling back to a path-aligned suffix match. An exact
        match wins outright; other units sharing the suffix do not make it
        ambiguous.
    """

    EXACT = "exact"
    SUFFIX = "suffix"
