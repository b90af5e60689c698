import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from padline_tree_sitter import JSParser, dialect_for_path

from .autofix import AutoFixEngine
from .models import InternalIssue, PaddingRule, Severity
from .rules.padding_lines import PaddingLineBetweenStatementsRule

logger = logging.getLogger("padline.engine")

MAX_FIX_PASSES = 10


@dataclass
class LintResult:
    """Issues found in one source unit, plus the (possibly fixed) source"""

    file_path: Path
    source: str
    issues: List[InternalIssue] = field(default_factory=list)
    fixed: bool = False
    errors: List[str] = field(default_factory=list)


class LinterEngine:
    """Core engine for padding-line linting"""

    def __init__(
        self,
        rules: Sequence[PaddingRule],
        severity: Severity = Severity.ERROR,
        dialect: Optional[str] = None,
    ):
        self.rule = PaddingLineBetweenStatementsRule(rules, severity)
        self.autofix = AutoFixEngine()
        self.dialect = dialect
        self._parsers: Dict[str, JSParser] = {}

    def _parser_for(self, file_path: Path, dialect: Optional[str]) -> JSParser:
        dialect = dialect or self.dialect or dialect_for_path(file_path)
        if dialect not in self._parsers:
            self._parsers[dialect] = JSParser(dialect)
        return self._parsers[dialect]

    def lint_string(
        self,
        source: str,
        file_path: Path = Path("<input>"),
        dialect: Optional[str] = None,
    ) -> LintResult:
        """Run the padding rule over a source string"""
        parse_result = self._parser_for(file_path, dialect).parse_string(source)
        if parse_result.errors:
            logger.warning(f"{file_path}: skipped, {len(parse_result.errors)} syntax error(s)")
            return LintResult(file_path=file_path, source=source, errors=list(parse_result.errors))

        issues = self.rule.check(file_path, parse_result)
        return LintResult(
            file_path=file_path,
            source=source,
            issues=sorted(issues, key=lambda x: (x.line, x.column)),
        )

    def fix_string(
        self,
        source: str,
        file_path: Path = Path("<input>"),
        dialect: Optional[str] = None,
    ) -> LintResult:
        """Lint and apply fixes repeatedly until the source is stable"""
        current_source = source
        result = self.lint_string(current_source, file_path, dialect)

        passes = 0
        while passes < MAX_FIX_PASSES and not result.errors:
            fixable = [i for i in result.issues if i.auto_fixable]
            if not fixable:
                break

            passes += 1
            new_source, applied = self.autofix.apply_fixes(current_source, fixable)
            logger.debug(f"{file_path}: pass {passes} applied {applied} fix(es)")
            if new_source == current_source:
                break

            current_source = new_source
            result = self.lint_string(current_source, file_path, dialect)

        if passes == MAX_FIX_PASSES:
            logger.warning(f"{file_path}: reached max fix passes ({MAX_FIX_PASSES})")

        result.fixed = current_source != source
        return result

    def lint_file(self, file_path: Path) -> LintResult:
        return self.lint_string(self._read(file_path), file_path)

    def fix_file(self, file_path: Path) -> LintResult:
        """Fix a file in place; the file is only rewritten when something changed"""
        result = self.fix_string(self._read(file_path), file_path)
        if result.fixed:
            with open(file_path, "w", encoding="utf-8", newline="") as f:
                f.write(result.source)
            logger.info(f"{file_path}: fixed")
        return result

    @staticmethod
    def _read(file_path: Path) -> str:
        with open(file_path, encoding="utf-8", newline="") as f:
            return f.read()
