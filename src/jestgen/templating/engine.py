"""Placeholder substitution engine for ``${name}`` templates.

Substitution is by exact token: ``${name}`` is only ever replaced as a
whole, so a placeholder whose name is a prefix of another
(``fileName`` / ``fileNameUpper``) cannot clobber it.  Bound values may
themselves contain ``${other}`` references; those are resolved against the
same bindings, and anything unresolved or cyclic is left verbatim.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from jestgen.templating.groups import CONDITIONAL_GROUPS

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from jestgen.templating.groups import ConditionalGroup

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$\{([^{}\r\n]+)\}")


def placeholder(name: str) -> str:
    """Return the template token for *name*."""
    return "${" + name + "}"


def find_placeholders(template: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    seen: dict[str, None] = {}
    for match in _PLACEHOLDER_RE.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)


def resolve_value(
    value: str,
    bindings: Mapping[str, str],
    active: frozenset[str] = frozenset(),
    literal: Collection[str] = (),
) -> str:
    """Expand ``${name}`` references inside *value* using *bindings*.

    *active* holds the names currently being expanded; a reference back to
    one of them is a cycle and stays as written.  Values of *literal* names
    are inserted as they are, without being scanned again.
    """

    def _expand(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in bindings or name in active:
            return match.group(0)
        if name in literal:
            return bindings[name]
        return resolve_value(bindings[name], bindings, active | {name}, literal)

    return _PLACEHOLDER_RE.sub(_expand, value)


def substitute(
    template: str, bindings: Mapping[str, str], literal: Collection[str] = ()
) -> str:
    """Replace every bound placeholder in *template* in a single pass.

    Names in *literal* hold free text (labels read from doc comments) and
    are never expanded further.
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in bindings:
            return match.group(0)
        if name in literal:
            return bindings[name]
        return resolve_value(bindings[name], bindings, frozenset({name}), literal)

    return _PLACEHOLDER_RE.sub(_replace, template)


def remove_group_lines(template: str, prefix: str) -> str:
    """Drop every line that mentions a ``${<prefix>...}`` placeholder.

    The line terminator goes with the line, and one blank line directly
    after it is absorbed so repeated removals do not pile up empty lines.
    """
    pattern = re.compile(
        r"^[^\r\n]*\$\{"
        + re.escape(prefix)
        + r"[^}\r\n]*\}[^\r\n]*(?:\r?\n|\Z)(?:[ \t]*\r?\n)?",
        re.MULTILINE,
    )
    return pattern.sub("", template)


def render(
    template: str,
    bindings: Mapping[str, str],
    enabled_groups: Collection[str] = (),
    *,
    groups: Mapping[str, ConditionalGroup] | None = None,
    literal: Collection[str] = (),
) -> str:
    """Render *template* with *bindings* and conditional groups.

    Args:
        template: Template text containing ``${name}`` placeholders.
        bindings: Values for plain placeholders.
        enabled_groups: Names of conditional groups to keep.  Every other
            group in *groups* has its lines removed.
        groups: Group table; defaults to ``CONDITIONAL_GROUPS``.
        literal: Binding names whose values are inserted verbatim.

    Returns:
        The rendered text.  Placeholders without a binding are kept as-is.
    """
    table = CONDITIONAL_GROUPS if groups is None else groups
    enabled = set(enabled_groups)
    unknown = enabled - set(table)
    if unknown:
        logger.debug("Ignoring unknown conditional groups: %s", ", ".join(sorted(unknown)))

    merged: dict[str, str] = dict(bindings)
    for group in table.values():
        if group.name in enabled:
            merged.update(group.snippets)
        else:
            template = remove_group_lines(template, group.prefix)

    return substitute(template, merged, literal)
