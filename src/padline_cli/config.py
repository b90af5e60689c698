import logging
import tomllib
from pathlib import Path
from typing import Any, List, Union

from padline_linter.models import PaddingPolicy, PaddingRule, Severity
from padline_linter.statement_types import StatementType
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger("padline.config")

StatementOption = Union[StatementType, List[StatementType]]


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or fails validation"""


class RuleConfig(BaseModel):
    """One ``[[tool.padline.rules]]`` entry"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    blank_line: PaddingPolicy = Field(alias="blankLine")
    prev: StatementOption
    next: StatementOption

    @field_validator("prev", "next")
    @classmethod
    def _non_empty_unique(cls, value: StatementOption) -> StatementOption:
        if isinstance(value, list):
            if not value:
                raise ValueError("must name at least one statement type")
            if len(set(value)) != len(value):
                raise ValueError("statement types must be unique")
        return value

    def to_padding_rule(self) -> PaddingRule:
        def as_set(option: StatementOption):
            return frozenset(option) if isinstance(option, list) else frozenset([option])

        return PaddingRule(blank_line=self.blank_line, prev=as_set(self.prev), next=as_set(self.next))


class PadlineSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    severity: Severity = Severity.ERROR
    rules: List[RuleConfig] = []


class LintConfig:
    """Handles loading and validation of the ``[tool.padline]`` configuration table"""

    def __init__(self, config_path: Path | None = None):
        self.severity: Severity = Severity.ERROR
        self.rules: List[PaddingRule] = []
        self.source: Path | None = None

        if config_path and config_path.exists():
            self._load_from_file(config_path)
        elif config_path:
            logger.debug(f"No configuration at {config_path}; no padding rules enabled")

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"{path}: {e}") from e

        self.load_dict(data.get("tool", {}).get("padline", {}))
        self.source = path
        logger.info(f"Loaded {len(self.rules)} padding rule(s) from {path}")

    def load_dict(self, table: dict[str, Any]):
        try:
            settings = PadlineSettings.model_validate(table)
        except ValidationError as e:
            messages = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise ConfigError("Invalid padline configuration:\n  " + "\n  ".join(messages)) from e

        self.severity = settings.severity
        self.rules = [rule.to_padding_rule() for rule in settings.rules]
