"""Error taxonomy for scaffold generation.

Every error carries a short, user-facing message.  ``ConfigLoadError`` and
``SourceParseError`` are recovered internally; the rest end an invocation
and are reported by the caller.
"""

from __future__ import annotations


class JestGenError(Exception):
    """Base class for all jestgen errors."""


class UserInputError(JestGenError):
    """The invocation target is unusable (no file, wrong kind, no word)."""


class ConfigLoadError(JestGenError):
    """``.jestgen.json`` is missing or malformed."""


class TemplateLoadError(JestGenError):
    """A custom or bundled template could not be read."""


class SourceParseError(JestGenError):
    """The source unit could not be read or parsed for doc comments."""


class ArtifactIOError(JestGenError):
    """Reading or writing the test artifact failed."""
