"""Agents that analyse sources and build test scaffolds."""
