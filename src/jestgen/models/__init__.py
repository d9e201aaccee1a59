"""Data models for jestgen."""

from jestgen.models.scaffold import ScaffoldAction, ScaffoldResult, SourceUnitDescriptor

__all__ = [
    "ScaffoldAction",
    "ScaffoldResult",
    "SourceUnitDescriptor",
]
