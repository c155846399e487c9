"""Diagnostic records surfaced to the caller of a scheduling run."""

from __future__ import annotations

from dataclasses import dataclass

from waveplan.contracts.enums import DiagnosticCode, Severity
from waveplan.contracts.types import UnitID


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reportable condition, naming the offending unit.

    expression carries the unresolved DependsOn expression or structural
    reference where one applies.
    """

    code: DiagnosticCode
    severity: Severity
    message: str
    unit_name: str
    identity: UnitID | None = None
    expression: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @classmethod
    def error(
        cls,
        code: DiagnosticCode,
        message: str,
        *,
        unit_name: str,
        identity: UnitID | None = None,
        expression: str | None = None,
    ) -> Diagnostic:
        return cls(
            code=code,
            severity=Severity.ERROR,
            message=message,
            unit_name=unit_name,
            identity=identity,
            expression=expression,
        )

    @classmethod
    def info(cls, code: DiagnosticCode, message: str, *, unit_name: str, identity: UnitID | None = None) -> Diagnostic:
        return cls(code=code, severity=Severity.INFO, message=message, unit_name=unit_name, identity=identity)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "code": self.code.value,
            "severity": self.severity.value,
            "message": self.message,
            "unit": self.unit_name,
            "identity": self.identity,
            "expression": self.expression,
        }
