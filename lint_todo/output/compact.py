"""
CompactRenderer -- One line per diagnostic

    path/to/a.css: line 2, col 3, error - Unexpected hex color (color-no-hex)

Results without a source path drop the "path: " prefix.
"""

from typing import List

from .base import BaseRenderer
from .table import sort_diagnostics
from ..core.diagnostics import Result, Severity


class CompactRenderer(BaseRenderer):
    """Grep-friendly rendering, no colors and no alignment."""

    def render(self, results: List[Result]) -> str:
        lines = []
        for result in results:
            prefix = f"{self.display_path(result.source)}: " if result.source else ""
            for d in sort_diagnostics(result.diagnostics):
                if d.severity == Severity.OFF:
                    continue
                lines.append(f"{prefix}line {d.line}, col {d.column}, {d.severity.value} - {d.text}")
        return "\n".join(lines)
