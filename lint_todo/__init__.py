"""
lint-todo -- Todo-aware formatter for stylelint results

Lets a codebase adopt a lint rule before every violation is fixed:
known errors are recorded as todos in a .lint-todo ledger and shown as
todos (or, as they age, warnings and errors) instead of failing the run.

Usage:
    UPDATE_TODO=1 lint-todo report.json     # record current errors
    lint-todo report.json                   # errors already recorded pass
    INCLUDE_TODO=1 lint-todo report.json    # show recorded todos too
    COMPACT_TODO=1 lint-todo                # shrink the ledger file
"""

__version__ = "0.1.0"

# Core layer (data)
from .core.diagnostics import Diagnostic, LinterReturn, Result, Severity, results_from_data
from .core.severity import SeverityCode, map_severity

# Ledger layer
from .ledger import BaseLedger, TodoConfig, TodoLedger, TodoRecord

# Todo layer
from .todos import TodoReconciler, build_maybe_todos, update_results

# Output layer
from .output import PrintOptions, TodoInfo, get_formatter, print_results

# Entry points
from .config import TodoSettings
from .formatter import TodoFormatter, formatter
from .exceptions import (
    LedgerCorruptError,
    LintTodoError,
    TodoConfigError,
    UnknownFormatError,
    UnknownSeverityError,
)

__all__ = [
    '__version__',
    'Diagnostic', 'LinterReturn', 'Result', 'Severity', 'results_from_data',
    'SeverityCode', 'map_severity',
    'BaseLedger', 'TodoConfig', 'TodoLedger', 'TodoRecord',
    'TodoReconciler', 'build_maybe_todos', 'update_results',
    'PrintOptions', 'TodoInfo', 'get_formatter', 'print_results',
    'TodoSettings', 'TodoFormatter', 'formatter',
    'LedgerCorruptError', 'LintTodoError', 'TodoConfigError', 'UnknownFormatError', 'UnknownSeverityError',
]
