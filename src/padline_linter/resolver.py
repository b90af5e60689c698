from typing import Sequence

from padline_tree_sitter import Node

from .models import PaddingPolicy, PaddingRule
from .statement_types import StatementClassifier


class RuleResolver:
    """Picks the padding policy for an adjacent statement pair.

    Rules are scanned from last to first and the first one whose ``prev``
    and ``next`` both match wins, so a rule declared later overrides the
    broader rules before it. Pairs no rule covers are unconstrained.
    """

    def __init__(self, rules: Sequence[PaddingRule], classifier: StatementClassifier):
        self.rules = list(rules)
        self.classifier = classifier

    def resolve(self, prev_node: Node, next_node: Node) -> PaddingPolicy:
        for rule in reversed(self.rules):
            if self.classifier.match(prev_node, rule.prev) and self.classifier.match(next_node, rule.next):
                return rule.blank_line
        return PaddingPolicy.ANY
