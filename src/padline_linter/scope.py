import logging
from dataclasses import dataclass
from typing import List, Optional

from padline_tree_sitter import Node

logger = logging.getLogger("padline.scope")

# Containers whose direct statements are compared pairwise
SIBLING_LIST_TYPES = frozenset(
    {
        "BlockStatement",
        "Program",
        "StaticBlock",
        "SwitchCase",
        "SwitchStatement",
        "TSInterfaceBody",
        "TSModuleBlock",
        "TSTypeLiteral",
    }
)


@dataclass
class ScopeFrame:
    prev_node: Optional[Node] = None


class ScopeTracker:
    """Stack of sibling-list frames, one per open statement container"""

    def __init__(self):
        self._frames: List[ScopeFrame] = []

    @property
    def current(self) -> Optional[ScopeFrame]:
        return self._frames[-1] if self._frames else None

    def enter(self) -> None:
        self._frames.append(ScopeFrame())

    def exit(self) -> None:
        if not self._frames:
            logger.debug("exit() called with no open scope; ignoring")
            return
        self._frames.pop()

    @staticmethod
    def is_eligible(node: Node) -> bool:
        return node.parent is not None and node.parent.type in SIBLING_LIST_TYPES

    def visit(self, node: Node) -> Optional[Node]:
        """Advance the current frame to ``node`` and return the sibling it follows.

        Returns None when ``node`` is not a direct member of a sibling list,
        is the first member of its list, or no frame is open.
        """
        frame = self.current
        if frame is None or not self.is_eligible(node):
            return None
        prev_node = frame.prev_node
        frame.prev_node = node
        return prev_node
