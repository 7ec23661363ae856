"""Todo reclassification: candidates, reconciliation and result mutation."""

from .candidates import DEFAULT_ENGINE, build_maybe_todos
from .mutator import (
    INVALID_TODO_RULE,
    build_invalid_todo_violation,
    find_result,
    merge_violations,
    update_errored_state,
    update_results,
)
from .reconcile import (
    FileReconciliation,
    ReconciliationOutcome,
    TodoReconciler,
    TodoTally,
)

__all__ = [
    'DEFAULT_ENGINE', 'build_maybe_todos',
    'INVALID_TODO_RULE', 'build_invalid_todo_violation', 'find_result',
    'merge_violations', 'update_errored_state', 'update_results',
    'FileReconciliation', 'ReconciliationOutcome', 'TodoReconciler', 'TodoTally',
]
