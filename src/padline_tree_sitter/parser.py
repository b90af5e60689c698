import logging
from pathlib import Path
from typing import Dict, List

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Node as TSNode, Parser

from .estree import ESTreeBuilder
from .node_types import ParseResult
from .source_code import LineIndex, SourceCode

logger = logging.getLogger("padline.parser")

DIALECTS = ("javascript", "typescript", "tsx")

SUFFIX_DIALECTS: Dict[str, str] = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


def dialect_for_path(path: Path) -> str:
    """Pick the grammar for a file from its suffix (javascript when unknown)"""
    return SUFFIX_DIALECTS.get(path.suffix.lower(), "javascript")


def _load_language(dialect: str) -> Language:
    if dialect == "javascript":
        return Language(tsjs.language())
    if dialect == "typescript":
        return Language(tsts.language_typescript())
    if dialect == "tsx":
        return Language(tsts.language_tsx())
    raise ValueError(f"Unknown dialect '{dialect}', expected one of {', '.join(DIALECTS)}")


class JSParser:
    """tree-sitter parser producing ESTree-shaped nodes and a token store"""

    def __init__(self, dialect: str = "javascript"):
        self.dialect = dialect
        self.language = _load_language(dialect)
        self.parser = Parser(self.language)

    def parse_file(self, file_path: Path) -> ParseResult:
        with open(file_path, encoding="utf-8", newline="") as f:
            return self.parse_string(f.read())

    def parse_string(self, source: str) -> ParseResult:
        tree = self.parser.parse(source.encode("utf-8"))
        line_index = LineIndex(source)

        builder = ESTreeBuilder(source, line_index)
        builder.collect_tokens(tree.root_node)
        program = builder.build(tree.root_node)

        source_code = SourceCode(source, program, builder.tokens, builder.comments, line_index)
        errors = self._collect_errors(tree.root_node, builder) if tree.root_node.has_error else []
        if errors:
            logger.debug(f"[{self.dialect}] {len(errors)} syntax error(s), first: {errors[0]}")

        return ParseResult(
            tree=tree,
            source=source,
            program=program,
            source_code=source_code,
            errors=errors,
        )

    def _collect_errors(self, root: TSNode, builder: ESTreeBuilder) -> List[str]:
        errors = []

        def visit(node: TSNode):
            if node.is_missing:
                position = builder.line_index.position(builder.offset(node.start_byte))
                errors.append(f"{position.line}:{position.column + 1}: missing '{node.type}'")
                return
            if node.type == "ERROR":
                position = builder.line_index.position(builder.offset(node.start_byte))
                errors.append(f"{position.line}:{position.column + 1}: syntax error")
                return
            if node.has_error:
                for child in node.children:
                    visit(child)

        visit(root)
        return errors
