import logging
from pathlib import Path
from typing import Sequence

from padline_tree_sitter import ASTWalker, Node, ParseResult

from ..models import InternalIssue, PaddingRule, Severity
from ..padding import PaddingEnforcer
from ..resolver import RuleResolver
from ..scanner import BlankLineScanner
from ..scope import ScopeTracker
from ..statement_types import StatementClassifier
from .base import BaseRule

logger = logging.getLogger("padline.rules")

# Nodes that open a new sibling list for the statements they contain
SCOPE_TYPES = frozenset(
    {
        "Program",
        "BlockStatement",
        "SwitchStatement",
        "SwitchCase",
        "StaticBlock",
        "TSInterfaceBody",
        "TSModuleBlock",
        "TSTypeLiteral",
        "TSDeclareFunction",
        "TSMethodSignature",
    }
)

# Members of sibling lists whose ESTree type does not end in Statement/Declaration
EXTRA_STATEMENT_TYPES = frozenset({"SwitchCase", "TSDeclareFunction", "TSMethodSignature"})


def is_statement(node: Node) -> bool:
    return (
        node.type.endswith("Statement")
        or node.type.endswith("Declaration")
        or node.type in EXTRA_STATEMENT_TYPES
    )


class PaddingLineBetweenStatementsRule(BaseRule):
    """Require or disallow padding lines between statements"""

    def __init__(self, rules: Sequence[PaddingRule], severity: Severity = Severity.ERROR):
        self.rules = list(rules)
        self._severity = severity

    @property
    def rule_id(self) -> str:
        return "padding-line-between-statements"

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def auto_fixable(self) -> bool:
        return True

    @property
    def description(self) -> str:
        return "Require or disallow padding lines between statements"

    def check(self, file_path: Path, parse_result: ParseResult) -> list[InternalIssue]:
        if not self.rules:
            return []

        source_code = parse_result.source_code
        resolver = RuleResolver(self.rules, StatementClassifier(source_code))
        scanner = BlankLineScanner(source_code)
        enforcer = PaddingEnforcer(source_code)
        scopes = ScopeTracker()
        issues: list[InternalIssue] = []

        def enter(node: Node):
            if is_statement(node):
                prev_node = scopes.visit(node)
                if prev_node is not None:
                    policy = resolver.resolve(prev_node, node)
                    padding_lines = scanner.scan(prev_node, node)
                    violation = enforcer.verify(policy, prev_node, node, padding_lines)
                    if violation is not None:
                        issues.append(self._create_issue(file_path, violation))
            if node.type in SCOPE_TYPES:
                scopes.enter()

        def leave(node: Node):
            if node.type in SCOPE_TYPES:
                scopes.exit()

        ASTWalker.walk(parse_result.program, enter, leave)

        logger.debug(f"{file_path}: {len(issues)} padding issue(s) from {len(self.rules)} rule(s)")
        return issues
