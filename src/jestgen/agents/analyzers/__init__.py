"""Analyzers that read metadata out of source files."""

from jestgen.agents.analyzers.metadata import (
    extract_descriptor,
    extract_descriptor_or_fallback,
    fallback_descriptor,
)

__all__ = [
    "extract_descriptor",
    "extract_descriptor_or_fallback",
    "fallback_descriptor",
]
