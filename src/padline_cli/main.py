import logging
from pathlib import Path

import typer
from padline_linter.engine import LinterEngine, LintResult
from padline_linter.statement_types import StatementType
from padline_tree_sitter import DIALECTS
from padline_tree_sitter.parser import SUFFIX_DIALECTS

from .config import ConfigError, LintConfig
from .converters import internal_issue_to_lint_issue

logger = logging.getLogger("padline.cli")

app = typer.Typer(help="padline - Enforce blank lines between JavaScript/TypeScript statements")

SKIPPED_DIRS = {"node_modules", ".git"}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_file: Path) -> LintConfig:
    try:
        return LintConfig(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


def _expand_paths(paths: list[Path]) -> list[Path]:
    files = []
    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if SKIPPED_DIRS.intersection(candidate.parts):
                    continue
                if candidate.is_file() and candidate.suffix.lower() in SUFFIX_DIALECTS:
                    files.append(candidate)
        else:
            files.append(path)
    return files


@app.command()
def lint(
    files: list[Path] = typer.Argument(None, help="Files or directories to lint"),
    config_file: Path = typer.Option(Path(".padline.toml"), "--config", help="Path to config file"),
    severity: str = typer.Option("WARNING", help="Minimum severity to show"),
    dialect: str = typer.Option("auto", help=f"Grammar to parse with: auto, {', '.join(DIALECTS)}"),
    fix: bool = typer.Option(False, help="Automatically fix issues"),
):
    """Check blank lines between statements"""
    config = _load_config(config_file)

    if dialect != "auto" and dialect not in DIALECTS:
        typer.echo(f"Error: unknown dialect '{dialect}'", err=True)
        raise typer.Exit(code=2)

    paths = _expand_paths(files or [])
    if not paths:
        typer.echo("Error: Provide files or directories to lint")
        raise typer.Exit(code=1)

    engine = LinterEngine(
        config.rules,
        severity=config.severity,
        dialect=None if dialect == "auto" else dialect,
    )

    results: list[LintResult] = []
    failed_files = 0
    for file_path in paths:
        try:
            result = engine.fix_file(file_path) if fix else engine.lint_file(file_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"{file_path}: {e}")
            typer.echo(f"ERROR: {file_path}: {e}")
            failed_files += 1
            continue

        if result.fixed:
            typer.echo(f"  ✓ Fixed {file_path}")
        for error in result.errors:
            typer.echo(f"ERROR: {file_path}:{error} [syntax-error] - file skipped")
        if result.errors:
            failed_files += 1
        results.append(result)

    external_issues = [
        internal_issue_to_lint_issue(i, engine.rule.docs_url) for r in results for i in r.issues
    ]

    severity_rank = {"ERROR": 2, "WARNING": 1}
    min_rank = severity_rank.get(severity.upper(), 1)

    reported_count = 0
    for issue in sorted(external_issues, key=lambda x: (x.file_path, x.line_number, x.column)):
        if severity_rank.get(issue.severity.value, 0) >= min_rank:
            typer.echo(
                f"{issue.severity.value}: {issue.file_path}:{issue.line_number}:{issue.column} "
                f"[{issue.rule_id}] - {issue.message} ({issue.message_id})"
            )
            reported_count += 1

    typer.echo(f"\nTotal issues found: {len(external_issues)} ({reported_count} reported)")

    errors = sum(1 for i in external_issues if i.severity.value == "ERROR")
    if errors > 0 or failed_files > 0:
        raise typer.Exit(code=1)


@app.command()
def types():
    """List the statement types usable in prev/next"""
    for statement_type in StatementType:
        typer.echo(statement_type.value)


@app.command("check-config")
def check_config(
    config_file: Path = typer.Option(Path(".padline.toml"), "--config", help="Path to config file"),
):
    """Validate the configuration and print the resolved rules"""
    config = _load_config(config_file)
    if config.source is None:
        typer.echo(f"No configuration found at {config_file}")
        return

    typer.echo(f"{config.source}: severity={config.severity.value}, {len(config.rules)} rule(s)")
    for index, rule in enumerate(config.rules, start=1):
        prev = ", ".join(sorted(t.value for t in rule.prev))
        next_ = ", ".join(sorted(t.value for t in rule.next))
        typer.echo(f"  {index}. {rule.blank_line.value}: prev=[{prev}] next=[{next_}]")


if __name__ == "__main__":
    app()
