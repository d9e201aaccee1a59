"""Template-driven Jest test scaffolding for JavaScript and TypeScript functions."""

__version__ = "0.1.0"
