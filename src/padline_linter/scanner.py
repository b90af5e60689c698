from typing import List, Tuple, Union

from padline_tree_sitter import Node, SourceCode, Token

from .statement_types import is_semicolon_token

PaddingLine = Tuple[Token, Token]


def is_token_on_same_line(left: Union[Node, Token], right: Union[Node, Token]) -> bool:
    return left.loc.end.line == right.loc.start.line


def get_actual_last_token(node: Node, source_code: SourceCode) -> Token:
    """Last token of ``node``, ignoring a semicolon that leads the following line.

    ``foo()\\n;[1, 2].forEach(bar)`` keeps the semicolon with ``foo()`` in the
    tree, but visually the statement ends at ``)``.
    """
    semi_token = source_code.get_last_token(node)
    prev_token = source_code.get_token_before(semi_token)
    next_token = source_code.get_token_after(semi_token)
    if (
        prev_token is not None
        and next_token is not None
        and prev_token.range[0] >= node.range[0]
        and is_semicolon_token(semi_token)
        and not is_token_on_same_line(prev_token, semi_token)
        and is_token_on_same_line(semi_token, next_token)
    ):
        return prev_token
    return semi_token


class BlankLineScanner:
    """Finds the blank-line regions between two adjacent statements"""

    def __init__(self, source_code: SourceCode):
        self.source_code = source_code

    def scan(self, prev_node: Node, next_node: Node) -> List[PaddingLine]:
        """Return every adjacent token pair (comments included) two or more lines apart"""
        pairs: List[PaddingLine] = []
        prev_token = get_actual_last_token(prev_node, self.source_code)

        if next_node.loc.start.line - prev_token.loc.end.line < 2:
            return pairs

        while prev_token.range[0] < next_node.range[0]:
            token = self.source_code.get_token_after(prev_token, include_comments=True)
            if token is None:
                break
            if token.loc.start.line - prev_token.loc.end.line >= 2:
                pairs.append((prev_token, token))
            prev_token = token

        return pairs
