"""
TableRenderer -- Per-file diagnostic tables

Each file block is a header line followed by one row per diagnostic:

    a.css
     2:3  ✖  Unexpected hex color  color-no-hex

Columns are line, column, severity symbol, message and rule. Widths are
computed on plain text; colors are applied after padding so ANSI codes
never affect alignment. Messages wrap only when a width is set and the
row would not fit.
"""

import re
import textwrap
from typing import List, Optional

from .base import BaseRenderer
from ..core.diagnostics import Diagnostic, Result
from ..presentation.symbols import sanitize_control_chars


# Space taken by cell padding around the five columns
MARGIN_WIDTHS = 9
MIN_AVAILABLE_WIDTH = 80

_CONTROL_RUN = re.compile(r"[\x01-\x1A]+")


def clean_message(text: str, rule: str = None) -> str:
    """
    Message text as shown in the table.

    Control character runs collapse to one space, a trailing period is
    dropped and a trailing " (rule)" suffix is removed since the rule has
    its own column.
    """
    text = _CONTROL_RUN.sub(" ", text)
    text = sanitize_control_chars(text)
    if text.endswith("."):
        text = text[:-1]
    if rule:
        suffix = f" ({rule})"
        if text.endswith(suffix):
            text = text[:-len(suffix)]
    return text


def sort_diagnostics(diagnostics: List[Diagnostic]) -> List[Diagnostic]:
    """Positionless diagnostics first, then by line and column."""
    return sorted(
        diagnostics,
        key=lambda d: (d.has_position, d.line or 0, d.column or 0),
    )


class TableRenderer(BaseRenderer):
    """
    Render the visible diagnostics of each result as an aligned table.

    Callers decide visibility; every diagnostic handed to render_file() is
    printed.
    """

    def render(self, results: List[Result]) -> str:
        blocks = []
        for result in results:
            if result.diagnostics:
                blocks.append(self.render_file(result.source, result.diagnostics))
        return "\n".join(blocks)

    def render_file(self, source: Optional[str], diagnostics: List[Diagnostic]) -> str:
        """
        Render one file block.

        Args:
            source: Source path of the result (None: rows without a header)
            diagnostics: Diagnostics to show, in any order

        Returns:
            Header line plus table rows
        """
        ordered = sort_diagnostics(diagnostics)
        rows = [self._cells(d) for d in ordered]
        widths = self._calculate_widths(rows)
        message_width = self._message_width(widths)

        lines = [self.display_path(source)] if source else []
        for diagnostic, cells in zip(ordered, rows):
            lines.extend(self._format_row(diagnostic, cells, widths, message_width))
        return "\n".join(lines)

    # =========================================================================
    # Layout
    # =========================================================================

    def _cells(self, diagnostic: Diagnostic) -> List[str]:
        if diagnostic.has_position:
            line, column = str(diagnostic.line), str(diagnostic.column)
        else:
            line, column = "", ""
        return [
            line,
            column,
            self.symbols.for_severity(diagnostic.severity.value),
            clean_message(diagnostic.text, diagnostic.rule),
            diagnostic.rule or "",
        ]

    def _calculate_widths(self, rows: List[List[str]]) -> List[int]:
        widths = [1] * 5
        for cells in rows:
            for i, cell in enumerate(cells):
                widths[i] = max(widths[i], len(cell))
        return widths

    def _message_width(self, widths: List[int]) -> int:
        """
        Width of the message column.

        Unchanged when no width is set or the full row fits; otherwise the
        message column absorbs the overflow.
        """
        if self.width is None:
            return widths[3]

        available = max(MIN_AVAILABLE_WIDTH, self.width)
        full_width = sum(widths)
        if available > full_width + MARGIN_WIDTHS:
            return widths[3]
        return max(1, available - (full_width - widths[3] + MARGIN_WIDTHS))

    def _format_row(
        self,
        diagnostic: Diagnostic,
        cells: List[str],
        widths: List[int],
        message_width: int
    ) -> List[str]:
        line, column, symbol, message, rule = cells
        message_lines = textwrap.wrap(message, message_width) if len(message) > message_width else [message]
        message_lines = message_lines or [""]
        pad = min(widths[3], message_width)

        if line:
            position = f"{line.rjust(widths[0])}:{column.ljust(widths[1])}"
        else:
            position = " " * (widths[0] + 1 + widths[1])

        severity = diagnostic.severity.value
        first = (
            f" {self.palette.dim(position)} "
            f" {self.palette.severity(symbol.center(widths[2]), severity)} "
            f" {message_lines[0].ljust(pad)} "
            f" {self.palette.dim(rule)}"
        )
        lines = [first.rstrip()]

        blank = " " * (widths[0] + 1 + widths[1] + 2 + widths[2] + 2)
        for continuation in message_lines[1:]:
            lines.append(f" {blank}{continuation}".rstrip())
        return lines
