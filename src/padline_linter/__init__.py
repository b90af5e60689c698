"""
padline - blank-line policy between JavaScript/TypeScript statements

This package provides:
- A fixed vocabulary of statement shapes to match rules against
- Last-match-wins resolution of an ordered rule list
- Detection of blank-line regions between adjacent statements
- Safe automatic fixes for missing or unwanted blank lines
"""

__version__ = "0.1.0"

from .autofix import AutoFixEngine
from .engine import LinterEngine, LintResult
from .models import Fix, InternalIssue, PaddingPolicy, PaddingRule, Severity
from .statement_types import StatementClassifier, StatementType

__all__ = [
    "AutoFixEngine",
    "Fix",
    "InternalIssue",
    "LintResult",
    "LinterEngine",
    "PaddingPolicy",
    "PaddingRule",
    "Severity",
    "StatementClassifier",
    "StatementType",
]
