from .ast_walker import ASTWalker
from .node_types import Node, ParseResult, Position, SourceLocation, Token
from .parser import DIALECTS, JSParser, dialect_for_path
from .source_code import SourceCode

__all__ = [
    "ASTWalker",
    "DIALECTS",
    "JSParser",
    "Node",
    "ParseResult",
    "Position",
    "SourceCode",
    "SourceLocation",
    "Token",
    "dialect_for_path",
]
