"""
Output Module -- Report rendering for finalized lint results

The formatter hands finalized results and PrintOptions to print_results(),
which picks a renderer and returns the report text. Printing is the
caller's job.

Usage:
    from lint_todo.output import PrintOptions, print_results

    text = print_results(results, PrintOptions(include_todo=True))
    safe_print(text, end="")
"""

import importlib
from dataclasses import dataclass
from typing import Callable, List, Optional, TYPE_CHECKING

from ..core.diagnostics import Result
from ..exceptions import UnknownFormatError
from ..presentation.colors import Palette

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet

# Re-export for convenience
from .base import BaseRenderer, without_todos
from .table import TableRenderer, clean_message, sort_diagnostics
from .summary import ProblemCounts, SummaryRenderer, TodoInfo
from .report import ReportRenderer
from .json import JsonRenderer
from .compact import CompactRenderer
from .sarif import SarifRenderer


Formatter = Callable[[List[Result]], str]


# =============================================================================
# PrintOptions -- What the report should contain and how it should look
# =============================================================================

@dataclass
class PrintOptions:
    """
    Rendering options for one invocation.

    Attributes:
        include_todo: Show and count todo diagnostics
        update_todo: Update mode; enables the lifecycle line
        format_todo_as: Alternate format name or "module:function"
        todo_info: Lifecycle figures for the created / removed line
        symbols: SymbolSet (Unicode if None; the CLI passes the detected set)
        palette: Colors (disabled if None)
        width: Wrap width (None = never wrap)
        cwd: Directory file headers are relative to
    """
    include_todo: bool = False
    update_todo: bool = False
    format_todo_as: Optional[str] = None
    todo_info: Optional[TodoInfo] = None
    symbols: Optional["SymbolSet"] = None
    palette: Optional[Palette] = None
    width: Optional[int] = None
    cwd: Optional[str] = None


# =============================================================================
# Format Registry
# =============================================================================

# Alternate formats selectable through FORMAT_TODO_AS
FORMATS = {
    "json": JsonRenderer,
    "compact": CompactRenderer,
    "sarif": SarifRenderer,
}


def get_formatter(name, cwd: Optional[str] = None) -> Formatter:
    """
    Resolve an alternate format.

    Args:
        name: Built-in format name, "package.module:function" naming a
            callable that takes the results list and returns a string,
            a bare module name exposing `formatter`, or the callable itself
        cwd: Directory paths are shown relative to

    Returns:
        Callable rendering results to text

    Raises:
        UnknownFormatError: If the name resolves to nothing callable
    """
    if callable(name):
        return name
    if not isinstance(name, str):
        raise UnknownFormatError(name)

    renderer_class = FORMATS.get(name)
    if renderer_class is not None:
        return renderer_class(cwd=cwd).render

    module_name, _, attr = name.partition(":")
    if not module_name:
        raise UnknownFormatError(name)

    try:
        module = importlib.import_module(module_name)
    except ImportError:
        raise UnknownFormatError(name) from None

    formatter = getattr(module, attr or "formatter", None)
    if not callable(formatter):
        raise UnknownFormatError(name)
    return formatter


# =============================================================================
# Main Render Function
# =============================================================================

def print_results(results: List[Result], options: Optional[PrintOptions] = None) -> str:
    """
    Render finalized results to report text.

    Alternate formats receive copies of the results without todo
    diagnostics. The default report shows notices, per-file tables, the
    problem tally and, in update mode, the lifecycle line.

    Args:
        results: Finalized lint results
        options: Rendering options (defaults if None)

    Returns:
        Report text ("" when there is nothing to say)
    """
    options = options or PrintOptions()

    if options.format_todo_as:
        formatter = get_formatter(options.format_todo_as, cwd=options.cwd)
        return formatter(without_todos(results))

    renderer = ReportRenderer(
        symbols=options.symbols,
        width=options.width,
        palette=options.palette,
        cwd=options.cwd,
        include_todo=options.include_todo,
        todo_info=(options.todo_info or TodoInfo()) if options.update_todo else None,
    )
    return renderer.render(results)


__all__ = [
    'PrintOptions', 'TodoInfo', 'ProblemCounts', 'Formatter',
    'FORMATS', 'get_formatter', 'print_results',
    'BaseRenderer', 'TableRenderer', 'SummaryRenderer', 'ReportRenderer',
    'JsonRenderer', 'CompactRenderer', 'SarifRenderer',
    'clean_message', 'sort_diagnostics', 'without_todos',
]
