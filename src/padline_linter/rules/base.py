from abc import ABC, abstractmethod
from pathlib import Path

from padline_tree_sitter import ParseResult

from ..models import Fix, InternalIssue, Severity
from ..padding import Violation


class BaseRule(ABC):
    """Abstract base class for all linting rules."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'padding-line-between-statements')."""
        pass

    @property
    @abstractmethod
    def severity(self) -> Severity:
        """Configured severity for this rule."""
        pass

    @property
    def auto_fixable(self) -> bool:
        """Can this rule automatically fix violations?"""
        return False

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return ""

    @property
    def docs_url(self) -> str:
        return f"https://eslint.style/rules/{self.rule_id}"

    @abstractmethod
    def check(self, file_path: Path, parse_result: ParseResult) -> list[InternalIssue]:
        """Run the check over one parsed unit and return found issues."""
        pass

    # Helper method for consistent issue creation
    def _create_issue(self, file_path: Path, violation: Violation) -> InternalIssue:
        """Helper to create an issue with rule defaults."""
        fix: Fix | None = violation.fix
        return InternalIssue(
            file_path=file_path,
            line=violation.start.line,
            column=violation.start.column,
            end_line=violation.end.line,
            end_column=violation.end.column,
            rule_id=self.rule_id,
            message_id=violation.message_id,
            message=violation.message,
            severity=self.severity,
            auto_fixable=fix is not None,
            fix=fix,
        )
