from padline_linter.models import InternalIssue

from .models import LintIssue


def internal_issue_to_lint_issue(issue: InternalIssue, docs_url: str | None = None) -> LintIssue:
    """Convert an internal dataclass issue to an external Pydantic issue"""
    return LintIssue(
        severity=issue.severity.value.upper(),  # dataclass uses 'error', Pydantic uses 'ERROR'
        file_path=str(issue.file_path),
        line_number=issue.line,
        column=issue.column + 1,  # InternalIssue columns are 0-based like ESTree
        end_line=issue.end_line,
        end_column=issue.end_column + 1,
        rule_id=issue.rule_id,
        message_id=issue.message_id,
        message=issue.message,
        docs_url=docs_url,
        auto_fixable=issue.auto_fixable,
    )
