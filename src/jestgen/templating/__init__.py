"""Template loading, bindings and ``${name}`` substitution."""

from jestgen.templating.bindings import LABEL_BINDINGS, build_bindings, enabled_groups
from jestgen.templating.engine import find_placeholders, render, resolve_value, substitute
from jestgen.templating.groups import CONDITIONAL_GROUPS, SUPERTEST_GROUP, ConditionalGroup
from jestgen.templating.loader import load_case_template, load_header_template, read_template

__all__ = [
    "CONDITIONAL_GROUPS",
    "LABEL_BINDINGS",
    "SUPERTEST_GROUP",
    "ConditionalGroup",
    "build_bindings",
    "enabled_groups",
    "find_placeholders",
    "load_case_template",
    "load_header_template",
    "read_template",
    "render",
    "resolve_value",
    "substitute",
]
