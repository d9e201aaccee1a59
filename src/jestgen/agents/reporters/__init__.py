"""Reporters: present scaffold results to the user."""

from jestgen.agents.reporters.terminal import CLIReporter, reporter

__all__ = ["CLIReporter", "reporter"]
