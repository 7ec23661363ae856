"""
SummaryRenderer -- Problem tally and todo lifecycle lines

    3 problems (2 errors, 1 warning, 4 todos)
    ✔ 2 todos created, 1 todos removed (warn after 30, error after 60 days)
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .base import BaseRenderer
from ..core.diagnostics import Diagnostic, Result, Severity, count_by_severity
from ..ledger.config import TodoConfig


@dataclass
class ProblemCounts:
    """Visible diagnostic totals for one report."""
    errors: int = 0
    warnings: int = 0
    todos: int = 0

    @property
    def problems(self) -> int:
        return self.errors + self.warnings

    @property
    def total(self) -> int:
        return self.problems + self.todos

    @classmethod
    def from_diagnostics(cls, diagnostics: Iterable[Diagnostic], include_todo: bool = False) -> "ProblemCounts":
        """Count errors and warnings; todos only with include_todo. Off is never counted."""
        counts = count_by_severity(diagnostics)
        return cls(
            errors=counts[Severity.ERROR],
            warnings=counts[Severity.WARNING],
            todos=counts[Severity.TODO] if include_todo else 0,
        )


@dataclass
class TodoInfo:
    """Lifecycle figures shown after an update run."""
    added: int = 0
    removed: int = 0
    todo_config: TodoConfig = field(default_factory=TodoConfig)


class SummaryRenderer(BaseRenderer):
    """
    Render the closing lines of a report.

    Format:
        N problems (E errors, W warnings[, T todos])
        ✔ A todos created, R todos removed[ (warn after W, error after E days)]
    """

    def __init__(self, *args, include_todo: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.include_todo = include_todo

    def render(self, results: List[Result]) -> str:
        diagnostics = [d for result in results for d in result.diagnostics]
        return self.render_tally(ProblemCounts.from_diagnostics(diagnostics, self.include_todo))

    def render_tally(self, counts: ProblemCounts) -> str:
        """
        Tally line, or "" when there is nothing to report.

        Examples:
            1 problem (1 error, 0 warnings)
            5 problems (2 errors, 3 warnings, 1 todo)
        """
        if counts.total <= 0:
            return ""

        parts = [
            self.format_count(counts.errors, "error"),
            self.format_count(counts.warnings, "warning"),
        ]
        if self.include_todo:
            parts.append(self.format_count(counts.todos, "todo"))

        line = f"{self.format_count(counts.problems, 'problem')} ({', '.join(parts)})"
        return self.palette.paint(line, attrs=['bold'])

    def render_todo_summary(self, info: TodoInfo) -> str:
        """Created / removed line for update runs."""
        line = (
            f"{self.symbols.success} {info.added} todos created, "
            f"{info.removed} todos removed"
        )
        decay = self._decay_suffix(info.todo_config)
        if decay:
            line = f"{line} {decay}"
        return self.palette.paint(line, 'green')

    def _decay_suffix(self, todo_config: Optional[TodoConfig]) -> str:
        if todo_config is None:
            return ""

        days = todo_config.days_to_decay
        sides = []
        if days.warn:
            sides.append(f"warn after {days.warn}")
        if days.error:
            sides.append(f"error after {days.error}")
        if not sides:
            return ""
        return f"({', '.join(sides)} days)"
