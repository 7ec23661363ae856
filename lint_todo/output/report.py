"""
ReportRenderer -- Default human-readable report

Layout, each part omitted when empty:

    Invalid Option: ...
    Deprecation Warning: ... See: <reference>

    path/to/file.css
     2:3  ✖  message  rule

    N problems (E errors, W warnings)

    ✔ A todos created, R todos removed (warn after W days)
"""

from typing import List, Optional

from .base import BaseRenderer
from .summary import ProblemCounts, SummaryRenderer, TodoInfo
from .table import TableRenderer
from ..core.diagnostics import Diagnostic, Result, Severity


class ReportRenderer(BaseRenderer):
    """
    Render notices, per-file tables and summaries for a finalized run.

    Args:
        include_todo: Show and count todo diagnostics
        todo_info: Lifecycle figures; the created / removed line is only
            printed when given
    """

    def __init__(self, *args, include_todo: bool = False, todo_info: Optional[TodoInfo] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.include_todo = include_todo
        self.todo_info = todo_info
        self.table = TableRenderer(self.symbols, self.width, self.palette, self.cwd)
        self.summary = SummaryRenderer(
            self.symbols, self.width, self.palette, self.cwd, include_todo=include_todo
        )

    def render(self, results: List[Result]) -> str:
        output = self._invalid_options(results) + self._deprecations(results)

        counted: List[Diagnostic] = []
        for result in results:
            diagnostics = self.visible_diagnostics(result)
            counted.extend(diagnostics)
            if diagnostics:
                output += "\n" + self.table.render_file(result.source, diagnostics)

        output = output.strip()
        if output:
            output = f"\n{output}\n\n"
            tally = self.summary.render_tally(
                ProblemCounts.from_diagnostics(counted, self.include_todo)
            )
            if tally:
                output += f"{tally}\n\n"

        if self.todo_info is not None:
            output += self.summary.render_todo_summary(self.todo_info)
        return output

    # =========================================================================
    # Helpers
    # =========================================================================

    def visible_diagnostics(self, result: Result) -> List[Diagnostic]:
        """
        Diagnostics of a result that are shown and counted.

        Parse errors are added as error diagnostics unless the linter already
        reported one at the same position under the same rule. Off is never
        shown; todo only with include_todo.
        """
        diagnostics = list(result.diagnostics)
        seen = {(d.line, d.column, d.rule) for d in diagnostics}
        for parse_error in result.parse_errors:
            if (parse_error.line, parse_error.column, parse_error.classifier) not in seen:
                diagnostics.append(parse_error.to_diagnostic())

        return [
            d for d in diagnostics
            if d.severity != Severity.OFF
            and (self.include_todo or d.severity != Severity.TODO)
        ]

    def _invalid_options(self, results: List[Result]) -> str:
        texts = _unique(n.text for r in results for n in r.invalid_option_warnings)
        if not texts:
            return ""
        return "\n" + "\n".join(
            self.palette.paint(f"Invalid Option: {text}", 'red') for text in texts
        ) + "\n"

    def _deprecations(self, results: List[Result]) -> str:
        notices = []
        seen = set()
        for result in results:
            for notice in result.deprecations:
                if notice.text in seen:
                    continue
                seen.add(notice.text)
                notices.append(notice)
        if not notices:
            return ""

        lines = []
        for notice in notices:
            line = self.palette.paint(f"Deprecation Warning: {notice.text}", 'yellow')
            if notice.reference:
                line += f" See: {self.palette.underline(notice.reference)}"
            lines.append(line)
        return "\n" + "\n".join(lines) + "\n"


def _unique(items) -> List[str]:
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique
