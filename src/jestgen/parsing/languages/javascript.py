"""JavaScript / TypeScript / TSX export extractors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jestgen.parsing.languages.base import LanguageExtractor, _text
from jestgen.parsing.treesitter import ExportInfo

if TYPE_CHECKING:
    import tree_sitter

_VARIABLE_DECLARATIONS = ("lexical_declaration", "variable_declaration")


class JavaScriptExtractor(LanguageExtractor):
    language = "javascript"

    def extract_exports(self, root: tree_sitter.Node) -> list[ExportInfo]:
        results: list[ExportInfo] = []
        pending: list[str] = []
        for child in root.children:
            if child.type == "comment":
                body = _block_comment_body(_text(child))
                if body is not None:
                    pending.append(body)
                continue
            if child.type == "export_statement":
                results.append(
                    ExportInfo(
                        names=self._exported_names(child),
                        start_line=child.start_point.row + 1,
                        end_line=child.end_point.row + 1,
                        comments=pending,
                    )
                )
            pending = []
        return results

    # -- helpers --

    def _exported_names(self, node: tree_sitter.Node) -> list[str]:
        names: list[str] = []
        for child in node.children:
            if child.type in _VARIABLE_DECLARATIONS:
                names.extend(self._declarator_names(child))
            elif child.type == "export_clause":
                names.extend(self._specifier_names(child))
            elif child.type == "identifier":
                names.append(_text(child))
            else:
                name_node = child.child_by_field_name("name")
                if name_node is not None:
                    names.append(_text(name_node))
        return names

    def _declarator_names(self, node: tree_sitter.Node) -> list[str]:
        return [
            _text(child.child_by_field_name("name"))
            for child in node.children
            if child.type == "variable_declarator"
        ]

    def _specifier_names(self, node: tree_sitter.Node) -> list[str]:
        names: list[str] = []
        for spec in node.children:
            if spec.type != "export_specifier":
                continue
            for field_name in ("name", "alias"):
                field_node = spec.child_by_field_name(field_name)
                if field_node is not None:
                    names.append(_text(field_node))
        return names


class TypeScriptExtractor(JavaScriptExtractor):
    language = "typescript"


class TSXExtractor(JavaScriptExtractor):
    language = "tsx"


def _block_comment_body(text: str) -> str | None:
    """Return the inside of a ``/* ... */`` comment, or None for ``//`` comments."""
    if not text.startswith("/*"):
        return None
    body = text[2:]
    if body.endswith("*/"):
        body = body[:-2]
    return body.strip()
