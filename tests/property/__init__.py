# tests/property/__init__.py
"""Property-based tests for waveplan.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. A build plan that breaks order
for one odd graph shape builds against stale outputs.

Test categories:
- core/: wave ordering, completeness, determinism, cycle detection
"""
