"""Semantic type aliases for compile-time type safety."""

from typing import NewType

UnitID = NewType("UnitID", str)
"""Normalized absolute path of a build unit (e.g., '/repo/src/App/App.csproj')"""

UnitName = NewType("UnitName", str)
"""Short unit name, the file name without extension (e.g., 'App')"""
