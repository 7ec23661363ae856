"""
BaseRenderer -- Abstract base class for report renderers

All renderers inherit from this class and implement render().
Provides common utilities for pluralized counts, file path display
and todo filtering.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from ..core.diagnostics import Result, Severity
from ..presentation.colors import Palette

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet


class BaseRenderer(ABC):
    """
    Abstract base class for all report renderers.

    Provides:
    - Symbol set access (Unicode/ASCII)
    - Optional wrap width (None = never wrap)
    - Color palette (disabled by default)
    - Pluralization and path display helpers

    Subclasses must implement render() method.
    """

    def __init__(
        self,
        symbols: "SymbolSet" = None,
        width: Optional[int] = None,
        palette: Optional[Palette] = None,
        cwd: Optional[str] = None
    ):
        """
        Initialize renderer.

        Args:
            symbols: SymbolSet for visual elements (Unicode if None)
            width: Terminal width used for wrapping (None = no wrapping)
            palette: Color palette (colors disabled if None)
            cwd: Directory file headers are shown relative to (default: cwd)
        """
        from ..presentation.symbols import UNICODE

        self.symbols = symbols or UNICODE
        self.width = width
        self.palette = palette or Palette(enabled=False)
        self.cwd = cwd or os.getcwd()

    @abstractmethod
    def render(self, results: List[Result]) -> str:
        """
        Render lint results to a formatted string.

        Args:
            results: Finalized lint results

        Returns:
            Formatted string for output
        """

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def pluralize(self, word: str, count: int) -> str:
        return word if count == 1 else f"{word}s"

    def format_count(self, count: int, singular: str) -> str:
        """
        Format count with singular/plural noun.

        Examples:
            format_count(1, "error") -> "1 error"
            format_count(0, "error") -> "0 errors"
        """
        return f"{count} {self.pluralize(singular, count)}"

    def display_path(self, source: str) -> str:
        """
        Path shown in a file header.

        Pseudo sources such as "<input css 1>" are underlined, real paths are
        shown relative to cwd with forward slashes.
        """
        if source.startswith("<"):
            return self.palette.underline(source)
        return Path(os.path.relpath(source, self.cwd)).as_posix()


def without_todos(results: List[Result]) -> List[Result]:
    """Copies of results with todo diagnostics removed. Inputs are untouched."""
    return [
        replace(
            result,
            diagnostics=[d for d in result.diagnostics if d.severity != Severity.TODO],
        )
        for result in results
    ]
