from typing import List, Tuple

from .models import InternalIssue


class AutoFixEngine:
    """Applies the text replacements attached to linting issues"""

    def apply_fixes(self, source: str, issues: List[InternalIssue]) -> Tuple[str, int]:
        """Apply non-overlapping fixes in a single pass.

        Returns the new source and how many fixes were applied. A fix that
        starts at or before the end of an earlier one is skipped; the caller
        re-lints and picks it up on the next pass.
        """
        fixes = sorted(
            (issue.fix for issue in issues if issue.fix is not None),
            key=lambda f: (f.start, f.end),
        )
        if not fixes:
            return source, 0

        result = []
        last_offset = 0
        last_end = -1
        applied = 0
        for fix in fixes:
            if fix.start <= last_end:
                continue
            result.append(source[last_offset : fix.start])
            result.append(fix.text)
            last_offset = fix.end
            last_end = fix.end
            applied += 1
        result.append(source[last_offset:])
        return "".join(result), applied
