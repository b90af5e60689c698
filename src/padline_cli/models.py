from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


class LintIssue(BaseModel):
    severity: Severity
    file_path: str
    line_number: int
    column: int
    end_line: int
    end_column: int
    rule_id: str
    message_id: str
    message: str
    docs_url: Optional[str] = None
    auto_fixable: bool = False
