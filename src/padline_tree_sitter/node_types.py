from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from tree_sitter import Tree


@dataclass(frozen=True)
class Position:
    """A 1-based line and 0-based column, as ESTree reports them"""

    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    start: Position
    end: Position


@dataclass(frozen=True)
class Token:
    """A lexical unit (or comment) with its offsets into the source string"""

    type: str
    value: str
    range: Tuple[int, int]
    loc: SourceLocation


@dataclass(eq=False)
class Node:
    """Represents an ESTree-shaped node built from a tree-sitter parse"""

    type: str
    range: Tuple[int, int]
    loc: SourceLocation
    parent: Optional["Node"] = field(default=None, repr=False)
    children: List["Node"] = field(default_factory=list, repr=False)

    # Type-specific fields, only set where the ESTree node has them
    body: Any = field(default=None, repr=False)
    expression: Optional["Node"] = field(default=None, repr=False)
    callee: Optional["Node"] = field(default=None, repr=False)
    argument: Optional["Node"] = field(default=None, repr=False)
    expressions: Optional[List["Node"]] = field(default=None, repr=False)
    operator: Optional[str] = None
    kind: Optional[str] = None
    value: Any = None
    raw: Optional[str] = None


@dataclass
class ParseResult:
    """Result of parsing one JavaScript/TypeScript source unit"""

    tree: Tree
    source: str
    program: Node
    source_code: Any  # SourceCode; typed loosely to avoid an import cycle
    errors: List[str] = field(default_factory=list)
