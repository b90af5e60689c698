from typing import Callable, Optional

from .node_types import Node


class ASTWalker:
    """Utilities for traversing the ESTree node graph"""

    @staticmethod
    def walk(
        node: Node,
        enter: Callable[[Node], None],
        leave: Optional[Callable[[Node], None]] = None,
    ):
        """Perform a depth-first traversal, calling ``enter`` before and ``leave`` after children"""
        enter(node)
        for child in node.children:
            ASTWalker.walk(child, enter, leave)
        if leave is not None:
            leave(node)
