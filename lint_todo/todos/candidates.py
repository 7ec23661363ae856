"""
Todo candidates -- Ledger records proposed by the current lint run

Only live errors generate or refresh todo records. Warnings, todos and
disabled diagnostics are never candidates.
"""

from datetime import date
from typing import Iterable, Optional, Set

from ..core.diagnostics import Result, Severity
from ..ledger.config import TodoConfig
from ..ledger.records import (
    TodoRecord,
    build_range,
    read_source,
    relative_path,
    source_for_range,
)


DEFAULT_ENGINE = "stylelint"


def build_maybe_todos(
    base_dir,
    results: Iterable[Result],
    todo_config: Optional[TodoConfig] = None,
    engine: Optional[str] = None,
    created: Optional[date] = None
) -> Set[TodoRecord]:
    """
    Build candidate todo records for every error-severity diagnostic.

    Args:
        base_dir: Directory file paths are made relative to
        results: Lint results to scan (never mutated)
        todo_config: Decay configuration stamped onto the candidates
        engine: Engine id (default: stylelint)
        created: Creation date for the decay stamps (default: today)

    Returns:
        Set of candidates; equivalent candidates collapse to one
    """
    engine = engine or DEFAULT_ENGINE
    created = created or date.today()
    candidates: Set[TodoRecord] = set()

    for result in results:
        if not result.diagnostics:
            continue

        file_path = relative_path(base_dir, result.source)
        lines = read_source(result.source)

        for diagnostic in result.diagnostics:
            if diagnostic.severity != Severity.ERROR:
                continue

            todo_range = build_range(
                diagnostic.line,
                diagnostic.column,
                diagnostic.end_line,
                diagnostic.end_column,
            )
            rule_id = diagnostic.rule or ""
            days = todo_config.days_for_rule(rule_id) if todo_config else None

            candidates.add(TodoRecord(
                engine=engine,
                file_path=file_path,
                rule_id=rule_id,
                range=todo_range,
                source=source_for_range(lines, todo_range),
                created_date=created,
                warn_date=days.warn_date(created) if days else None,
                error_date=days.error_date(created) if days else None,
                original_diagnostic=diagnostic,
            ))

    return candidates
