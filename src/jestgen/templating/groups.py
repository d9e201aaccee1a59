"""Conditional placeholder groups toggled by a single configuration flag."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ConditionalGroup:
    """A named set of placeholders enabled or removed together.

    Every placeholder of the group starts with ``<name>_``.  When the group
    is enabled each placeholder becomes its snippet; otherwise every line
    mentioning one of them is dropped from the template.
    """

    name: str
    snippets: dict[str, str] = field(default_factory=dict)

    @property
    def prefix(self) -> str:
        return f"{self.name}_"


SUPERTEST_GROUP = ConditionalGroup(
    name="useSupertest",
    snippets={
        "useSupertest_app_import": "import { app } from '${appPath}';",
        "useSupertest_supertest_import": "import supertest from 'supertest';",
        "useSupertest_gen_server": "const server = app.listen();",
        "useSupertest_gen_request": "const request = supertest(server);",
        "useSupertest_close_server": "server.close();",
    },
)

CONDITIONAL_GROUPS: dict[str, ConditionalGroup] = {
    SUPERTEST_GROUP.name: SUPERTEST_GROUP,
}
