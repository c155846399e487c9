"""
Waveplan: dependency-aware build ordering for solution builds.

Computes which build units to build, in which waves, and with which
per-unit build parameters, for an outer build driver to execute.
"""

__version__ = "0.1.0"
