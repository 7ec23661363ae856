"""
Todo ledger -- Persisted todo records behind an abstract interface

BaseLedger is what the formatter depends on. TodoLedger is the
reference file-backed implementation.
"""

from .base import BaseLedger, TodoBatches, WriteTodoOptions
from .config import (
    ConfigValidation,
    DaysToDecay,
    TodoConfig,
    get_todo_config,
    validate_config,
)
from .records import TodoRange, TodoRecord, build_range, relative_path
from .store import STORAGE_FILE, TodoLedger

__all__ = [
    'BaseLedger', 'TodoBatches', 'WriteTodoOptions',
    'ConfigValidation', 'DaysToDecay', 'TodoConfig', 'get_todo_config', 'validate_config',
    'TodoRange', 'TodoRecord', 'build_range', 'relative_path',
    'STORAGE_FILE', 'TodoLedger',
]
