from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Optional

from .statement_types import StatementType


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class PaddingPolicy(str, Enum):
    """Blank-line requirement between two adjacent statements"""

    ANY = "any"
    NEVER = "never"
    ALWAYS = "always"


@dataclass(frozen=True)
class PaddingRule:
    """One configured ``{blankLine, prev, next}`` entry; each side is an OR-set"""

    blank_line: PaddingPolicy
    prev: FrozenSet[StatementType]
    next: FrozenSet[StatementType]


@dataclass(frozen=True)
class Fix:
    """Replace ``source[start:end]`` with ``text``"""

    start: int
    end: int
    text: str


@dataclass
class InternalIssue:
    """Internal representation of a linting issue"""

    file_path: Path
    line: int
    column: int
    end_line: int
    end_column: int
    rule_id: str
    message_id: str  # 'unexpectedBlankLine' or 'expectedBlankLine'
    message: str
    severity: Severity
    auto_fixable: bool
    fix: Optional[Fix] = None
