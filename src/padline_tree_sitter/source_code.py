"""Token store over a parsed source unit.

Offers the token navigation primitives a lint rule needs: first/last token
of a node, the token before/after a node or token, the tokens between two
positions, and the deepest node covering an offset. Comments are kept in a
separate list and only returned when ``include_comments`` is set.
"""

import re
from bisect import bisect_left, bisect_right
from typing import Callable, Iterator, List, Optional, Union

from .node_types import Node, Position, SourceLocation, Token

LINEBREAK_PATTERN = re.compile(r"\r\n|[\r\n\u2028\u2029]")

TokenFilter = Callable[[Token], bool]
Located = Union[Node, Token]


def utf16_length(text: str) -> int:
    """Length of ``text`` in UTF-16 code units, the unit ESTree columns count"""
    if text.isascii():
        return len(text)
    return len(text.encode("utf-16-le")) // 2


class LineIndex:
    """Maps string offsets to ESTree line/column positions"""

    def __init__(self, text: str):
        self.text = text
        self.line_starts = [0]
        self.lines: List[str] = []
        last = 0
        for m in LINEBREAK_PATTERN.finditer(text):
            self.lines.append(text[last : m.start()])
            last = m.end()
            self.line_starts.append(last)
        self.lines.append(text[last:])

    def position(self, offset: int) -> Position:
        line = bisect_right(self.line_starts, offset)
        line_start = self.line_starts[line - 1]
        return Position(line=line, column=utf16_length(self.text[line_start:offset]))

    def line_length(self, line: int) -> int:
        """UTF-16 length of a 1-based line, without its terminator"""
        return utf16_length(self.lines[line - 1])

    def location(self, start: int, end: int) -> SourceLocation:
        return SourceLocation(start=self.position(start), end=self.position(end))


class SourceCode:
    """Read-only view of the text, tokens, comments and node graph of one unit"""

    def __init__(
        self,
        text: str,
        program: Node,
        tokens: List[Token],
        comments: List[Token],
        line_index: LineIndex,
    ):
        self.text = text
        self.ast = program
        self.tokens = tokens
        self.comments = comments
        self._line_index = line_index

        self._tokens_and_comments = sorted(tokens + comments, key=lambda t: t.range[0])
        self._token_starts = [t.range[0] for t in tokens]
        self._all_starts = [t.range[0] for t in self._tokens_and_comments]

    def _store(self, include_comments: bool):
        if include_comments:
            return self._tokens_and_comments, self._all_starts
        return self.tokens, self._token_starts

    def get_first_token(
        self,
        node: Located,
        filter: Optional[TokenFilter] = None,
        include_comments: bool = False,
    ) -> Optional[Token]:
        tokens, starts = self._store(include_comments)
        start, end = node.range
        for i in range(bisect_left(starts, start), len(tokens)):
            token = tokens[i]
            if token.range[1] > end:
                break
            if filter is None or filter(token):
                return token
        return None

    def get_last_token(
        self,
        node: Located,
        filter: Optional[TokenFilter] = None,
        include_comments: bool = False,
    ) -> Optional[Token]:
        tokens, starts = self._store(include_comments)
        start, end = node.range
        for i in range(bisect_left(starts, end) - 1, -1, -1):
            token = tokens[i]
            if token.range[0] < start:
                break
            if token.range[1] > end:
                continue
            if filter is None or filter(token):
                return token
        return None

    def get_token_before(self, node: Located, include_comments: bool = False) -> Optional[Token]:
        tokens, starts = self._store(include_comments)
        index = bisect_left(starts, node.range[0])
        return tokens[index - 1] if index > 0 else None

    def get_token_after(self, node: Located, include_comments: bool = False) -> Optional[Token]:
        tokens, starts = self._store(include_comments)
        index = bisect_left(starts, node.range[1])
        return tokens[index] if index < len(tokens) else None

    def iter_tokens_between(
        self, left: Located, right: Located, include_comments: bool = False
    ) -> Iterator[Token]:
        """Yield tokens lying entirely between the end of ``left`` and the start of ``right``"""
        tokens, starts = self._store(include_comments)
        for i in range(bisect_left(starts, left.range[1]), len(tokens)):
            token = tokens[i]
            if token.range[1] > right.range[0]:
                break
            yield token

    def get_first_token_between(
        self,
        left: Located,
        right: Located,
        filter: Optional[TokenFilter] = None,
        include_comments: bool = False,
    ) -> Optional[Token]:
        for token in self.iter_tokens_between(left, right, include_comments):
            if filter is None or filter(token):
                return token
        return None

    def get_node_by_range_index(self, index: int) -> Optional[Node]:
        """Return the deepest node whose range contains ``index``"""
        node = self.ast
        if not node.range[0] <= index < node.range[1]:
            return None
        while True:
            for child in node.children:
                if child.range[0] <= index < child.range[1]:
                    node = child
                    break
            else:
                return node

    def line_length(self, line: int) -> int:
        return self._line_index.line_length(line)
