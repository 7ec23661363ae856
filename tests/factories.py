"""
Test Data Factory -- Lint runs backed by real files and a real ledger

Writes CSS sources and config files under tmp_path, builds stylelint-shaped
results pointing at them, and wires a TodoLedger with a fixed "today" so
decay behaviour is deterministic.

Usage:
    def test_something(todo_factory):
        results = [todo_factory.result("a.css", [todo_factory.error(2, 10)])]
        output = todo_factory.format(results, update_todo=True)
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from lint_todo.config import TodoSettings
from lint_todo.core.diagnostics import Diagnostic, LinterReturn, Result, Severity
from lint_todo.formatter import TodoFormatter
from lint_todo.ledger import TodoLedger
from lint_todo.output import PrintOptions
from lint_todo.presentation.colors import Palette
from lint_todo.presentation.symbols import UNICODE


DEFAULT_TODAY = date(2026, 3, 2)

HEX_SOURCE = "a {\n  color: #fff;\n}\n"
HEX_TEXT = 'Unexpected hex color "#fff" (color-no-hex)'


class LintTodoTestFactory:
    """
    Factory for isolated formatter environments.

    All files live under the pytest tmp_path, which doubles as the base
    directory of the ledger and the working directory for file headers.
    """

    def __init__(self, tmp_path: Path, today: date = DEFAULT_TODAY):
        """
        Initialize factory with temporary directory.

        Args:
            tmp_path: pytest tmp_path fixture for isolated temp directory
            today: Date the ledger treats as today
        """
        self.tmp_path = tmp_path
        self.today = today

    # =========================================================================
    # Files
    # =========================================================================

    def write_source(self, name: str, content: str = HEX_SOURCE) -> Path:
        path = self.tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def write_rc(self, data: Dict[str, Any]) -> Path:
        path = self.tmp_path / ".lint-todorc.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    def write_pyproject(self, text: str) -> Path:
        path = self.tmp_path / "pyproject.toml"
        path.write_text(text, encoding="utf-8")
        return path

    @property
    def storage_path(self) -> Path:
        return self.tmp_path / ".lint-todo"

    # =========================================================================
    # Lint Results
    # =========================================================================

    def error(
        self,
        line: int = 2,
        column: int = 10,
        rule: str = "color-no-hex",
        text: str = HEX_TEXT,
        severity: Severity = Severity.ERROR
    ) -> Diagnostic:
        return Diagnostic(line=line, column=column, rule=rule, text=text, severity=severity)

    def result(
        self,
        name: str,
        diagnostics: Optional[List[Diagnostic]] = None,
        content: str = HEX_SOURCE
    ) -> Result:
        """
        Result for a source file, writing the file if it does not exist.

        Args:
            name: Path relative to tmp_path
            diagnostics: Diagnostics of the result (default: none)
            content: Source written when the file is missing
        """
        path = self.tmp_path / name
        if not path.exists():
            self.write_source(name, content)
        diagnostics = diagnostics or []
        return Result(
            source=str(path),
            diagnostics=diagnostics,
            errored=any(d.severity == Severity.ERROR for d in diagnostics),
        )

    def hex_results(self, *names: str) -> List[Result]:
        """One color-no-hex error per named file."""
        return [self.result(name, [self.error()]) for name in names]

    # =========================================================================
    # Collaborators
    # =========================================================================

    def ledger(self, today: Optional[date] = None) -> TodoLedger:
        return TodoLedger(self.tmp_path, today=today or self.today)

    def days_later(self, days: int) -> date:
        return self.today + timedelta(days=days)

    def settings(self, **kwargs) -> TodoSettings:
        """TodoSettings outside CI, with overrides."""
        kwargs.setdefault("ci", False)
        return TodoSettings(**kwargs)

    def display(self) -> PrintOptions:
        return PrintOptions(
            symbols=UNICODE,
            palette=Palette(enabled=False),
            cwd=str(self.tmp_path),
        )

    def formatter(self, today: Optional[date] = None, **settings) -> TodoFormatter:
        return TodoFormatter(
            ledger=self.ledger(today),
            settings=self.settings(**settings),
            display=self.display(),
        )

    def format(
        self,
        results: List[Result],
        today: Optional[date] = None,
        linter_return: Optional[LinterReturn] = None,
        **settings
    ) -> str:
        """Run the formatter once over results."""
        return self.formatter(today, **settings).format(results, linter_return)

    def record_todos(self, *names: str) -> None:
        """Record one color-no-hex todo per named file."""
        self.format(self.hex_results(*names), update_todo=True)
