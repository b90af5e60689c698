import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from padline_tree_sitter import Node, Position, SourceCode, Token

from .models import Fix, PaddingPolicy
from .scanner import PaddingLine, get_actual_last_token, is_token_on_same_line

LT = r"(?:\r\n|[\r\n\u2028\u2029])"
PADDING_LINE_SEQUENCE = re.compile(rf"^(\s*?{LT})\s*{LT}(\s*;?)\Z")

MESSAGES = {
    "unexpectedBlankLine": "Unexpected blank line before this statement.",
    "expectedBlankLine": "Expected blank line before this statement.",
}


@dataclass(frozen=True)
class Violation:
    """A padding problem found before ``node``, with an optional fix"""

    message_id: str
    node: Node
    start: Position
    end: Position
    fix: Optional[Fix] = None

    @property
    def message(self) -> str:
        return MESSAGES[self.message_id]


class PaddingEnforcer:
    """Checks one adjacent pair against its resolved policy"""

    def __init__(self, source_code: SourceCode):
        self.source_code = source_code
        self._verifiers: Dict[PaddingPolicy, Callable[[Node, Node, List[PaddingLine]], Optional[Violation]]] = {
            PaddingPolicy.ANY: self.verify_for_any,
            PaddingPolicy.NEVER: self.verify_for_never,
            PaddingPolicy.ALWAYS: self.verify_for_always,
        }

    def verify(
        self,
        policy: PaddingPolicy,
        prev_node: Node,
        next_node: Node,
        padding_lines: List[PaddingLine],
    ) -> Optional[Violation]:
        return self._verifiers[policy](prev_node, next_node, padding_lines)

    def verify_for_any(self, prev_node, next_node, padding_lines) -> Optional[Violation]:
        return None

    def verify_for_never(self, prev_node, next_node, padding_lines) -> Optional[Violation]:
        if not padding_lines:
            return None

        fix = None
        # Several separate regions (e.g. around a comment) are left for a human to merge
        if len(padding_lines) == 1:
            prev_token, next_token = padding_lines[0]
            start = prev_token.range[1]
            end = next_token.range[0]
            text = PADDING_LINE_SEQUENCE.sub(r"\1\2", self.source_code.text[start:end], count=1)
            fix = Fix(start=start, end=end, text=text)

        return self._violation("unexpectedBlankLine", next_node, fix)

    def verify_for_always(self, prev_node, next_node, padding_lines) -> Optional[Violation]:
        if padding_lines:
            return None
        return self._violation("expectedBlankLine", next_node, self._insert_blank_line(prev_node, next_node))

    def _insert_blank_line(self, prev_node: Node, next_node: Node) -> Fix:
        prev_token = get_actual_last_token(prev_node, self.source_code)

        # Trailing tokens and comments on the boundary line stay with the previous statement
        def starts_next_line(token: Token) -> bool:
            nonlocal prev_token
            if is_token_on_same_line(prev_token, token):
                prev_token = token
                return False
            return True

        next_token = (
            self.source_code.get_first_token_between(
                prev_token, next_node, filter=starts_next_line, include_comments=True
            )
            or next_node
        )

        text = "\n\n" if is_token_on_same_line(prev_token, next_token) else "\n"
        return Fix(start=prev_token.range[1], end=prev_token.range[1], text=text)

    def _violation(self, message_id: str, node: Node, fix: Optional[Fix]) -> Violation:
        start, end = self._report_loc(node)
        return Violation(message_id=message_id, node=node, start=start, end=end, fix=fix)

    def _report_loc(self, node: Node):
        if node.loc.start.line == node.loc.end.line:
            return node.loc.start, node.loc.end
        line = node.loc.start.line
        return node.loc.start, Position(line=line, column=self.source_code.line_length(line))
