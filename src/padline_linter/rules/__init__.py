from .base import BaseRule
from .padding_lines import PaddingLineBetweenStatementsRule

__all__ = [
    "BaseRule",
    "PaddingLineBetweenStatementsRule",
]
