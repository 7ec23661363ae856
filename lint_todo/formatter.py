"""
Formatter -- Todo-aware formatting of one lint run

    Validating -> CompactOnly            (COMPACT_TODO)
               -> PerFile -> Finalizing  (everything else)

Validating checks config sources, run settings and decay thresholds
before anything touches the ledger. PerFile reconciles each result
against the ledger. Finalizing recomputes errored flags and renders the
report.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from .config import TodoSettings, get_base_dir
from .core.diagnostics import LinterReturn, Result
from .exceptions import TodoConfigError
from .ledger import STORAGE_FILE, BaseLedger, TodoConfig, TodoLedger
from .output import PrintOptions, TodoInfo, print_results
from .todos import DEFAULT_ENGINE, ReconciliationOutcome, TodoReconciler, update_errored_state


logger = logging.getLogger(__name__)


class TodoFormatter:
    """
    Formats lint results, converting known errors into todos.

    Args:
        ledger: Ledger collaborator (default: file ledger in the base dir)
        settings: Run switches (default: read from the environment)
        engine: Engine whose todos are managed
        display: Rendering options; the todo-related fields are filled in
            per run
    """

    def __init__(
        self,
        ledger: Optional[BaseLedger] = None,
        settings: Optional[TodoSettings] = None,
        engine: str = DEFAULT_ENGINE,
        display: Optional[PrintOptions] = None
    ):
        self.ledger = ledger or TodoLedger(get_base_dir())
        self.settings = settings or TodoSettings.from_env()
        self.engine = engine
        self.display = display or PrintOptions()

    def format(self, results: List[Result], linter_return: Optional[LinterReturn] = None) -> str:
        """
        Reconcile results with the ledger and render the report.

        Results are mutated in place: demoted severities, appended
        violations and refreshed errored flags.

        Raises:
            TodoConfigError: On conflicting or invalid configuration
            UnknownSeverityError: If the ledger reports an unknown severity
            UnknownFormatError: If FORMAT_TODO_AS cannot be resolved
        """
        todo_config = self.validate()

        if self.settings.compact_todo:
            return self.compact()

        outcome = self.reconcile(results, todo_config)

        update_errored_state(results, linter_return)

        options = replace(
            self.display,
            include_todo=self.settings.include_todo,
            update_todo=self.settings.update_todo,
            format_todo_as=self.settings.format_todo_as,
            todo_info=TodoInfo(
                added=outcome.added,
                removed=outcome.removed,
                todo_config=todo_config,
            ),
        )
        return print_results(results, options)

    # =========================================================================
    # States
    # =========================================================================

    def validate(self) -> TodoConfig:
        """
        Run every check that can abort the invocation.

        Returns:
            Decay configuration for the engine
        """
        validation = self.ledger.validate_config()
        if not validation.is_valid:
            raise TodoConfigError(validation.message)

        error = self.settings.validate()
        if error:
            raise TodoConfigError(error)

        return self.ledger.get_todo_config(
            self.engine,
            days_to_warn=self.settings.days_to_warn,
            days_to_error=self.settings.days_to_error,
        )

    def compact(self) -> str:
        compacted = self.ledger.compact()
        logger.debug("Compacted %d storage entries", compacted)
        return f"Removed {compacted} todos in {STORAGE_FILE} storage file"

    def reconcile(self, results: List[Result], todo_config: TodoConfig) -> ReconciliationOutcome:
        reconciler = TodoReconciler(
            self.ledger,
            todo_config=todo_config,
            engine=self.engine,
            update_todo=self.settings.update_todo,
            should_clean_todos=self.settings.should_clean_todos,
        )
        outcome = reconciler.run(results)
        logger.debug("Reconciled %d files: +%d -%d todos", len(outcome.files), outcome.added, outcome.removed)
        return outcome


def formatter(
    results: List[Result],
    linter_return: Optional[LinterReturn] = None,
    settings: Optional[TodoSettings] = None,
    ledger: Optional[BaseLedger] = None,
    display: Optional[PrintOptions] = None
) -> str:
    """
    Format one lint run.

    Args:
        results: Lint results, mutated in place
        linter_return: Receives the final errored flag
        settings: Run switches (default: environment)
        ledger: Ledger (default: file ledger in STYLELINT_TODO_DIR or cwd)
        display: Rendering options

    Returns:
        Report text
    """
    return TodoFormatter(ledger=ledger, settings=settings, display=display).format(results, linter_return)
