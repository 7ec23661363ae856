"""
Reconciliation -- Keeping the todo ledger consistent with the lint run

For each result, in input order:

    candidates = build_maybe_todos([result])
    ledger exists -> check severities of recorded matches   (before any write)
    update mode  -> ledger.write_todos(candidates)          (tally += counts)
    ledger exists -> batches = ledger.generate_todo_batches(candidates)
        remove/expired -> cleanup ? delete now : invalid-todo violations
        stable         -> demote matching diagnostics

Each file step produces a FileReconciliation accumulator. Its violations
are merged into the results at the end of the step and its tally is
folded into the invocation's ReconciliationOutcome.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from .candidates import DEFAULT_ENGINE, build_maybe_todos
from .mutator import build_invalid_todo_violation, merge_violations, update_results
from ..core.diagnostics import Diagnostic, Result
from ..core.severity import map_severity
from ..ledger.base import BaseLedger, TodoBatches, WriteTodoOptions
from ..ledger.config import TodoConfig
from ..ledger.records import TodoRecord, relative_path


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodoTally:
    """Added / removed record counts."""
    added: int = 0
    removed: int = 0

    def __add__(self, other: "TodoTally") -> "TodoTally":
        return TodoTally(
            added=self.added + other.added,
            removed=self.removed + other.removed,
        )


@dataclass
class FileReconciliation:
    """Everything one file step decided, before it is merged."""
    file_path: str
    tally: TodoTally = field(default_factory=TodoTally)
    batches: TodoBatches = field(default_factory=TodoBatches)
    violations: List[Diagnostic] = field(default_factory=list)
    demoted: int = 0


@dataclass
class ReconciliationOutcome:
    """Cumulative result of reconciling a whole lint run."""
    tally: TodoTally = field(default_factory=TodoTally)
    remove: Set[TodoRecord] = field(default_factory=set)
    stable: Set[TodoRecord] = field(default_factory=set)
    expired: Set[TodoRecord] = field(default_factory=set)
    files: List[FileReconciliation] = field(default_factory=list)

    @property
    def added(self) -> int:
        return self.tally.added

    @property
    def removed(self) -> int:
        return self.tally.removed

    def merge(self, step: FileReconciliation) -> "ReconciliationOutcome":
        """New outcome with one more file step folded in."""
        return ReconciliationOutcome(
            tally=self.tally + step.tally,
            remove=self.remove | step.batches.remove,
            stable=self.stable | step.batches.stable,
            expired=self.expired | step.batches.expired,
            files=self.files + [step],
        )


class TodoReconciler:
    """
    Drives per-file reconciliation against a ledger.

    Args:
        ledger: Ledger collaborator
        todo_config: Decay configuration for new records
        engine: Engine whose records are managed (default: stylelint)
        update_todo: Write new candidates and drop stale records
        should_clean_todos: Delete removed / expired records instead of
            reporting them as violations
    """

    def __init__(
        self,
        ledger: BaseLedger,
        todo_config: Optional[TodoConfig] = None,
        engine: str = DEFAULT_ENGINE,
        update_todo: bool = False,
        should_clean_todos: bool = True
    ):
        self.ledger = ledger
        self.todo_config = todo_config or TodoConfig()
        self.engine = engine
        self.update_todo = update_todo
        self.should_clean_todos = should_clean_todos

    @property
    def base_dir(self):
        return self.ledger.base_dir

    def options_for(self, file_path: str) -> WriteTodoOptions:
        engine = self.engine
        return WriteTodoOptions(
            engine=engine,
            file_path=file_path,
            todo_config=self.todo_config,
            should_remove=lambda record: record.engine == engine,
        )

    def check_severities(self, records: Set[TodoRecord]) -> None:
        """
        Map the ledger severity of every record.

        Raises:
            UnknownSeverityError: If the ledger reports a code outside -1..2
        """
        for record in records:
            map_severity(self.ledger.get_severity(record))

    def reconcile_file(self, results: List[Result], result: Result) -> FileReconciliation:
        """
        Reconcile one result against the ledger.

        Ledger writes for this file are committed here. Violations are only
        collected; the caller merges them.
        """
        file_path = relative_path(self.base_dir, result.source)
        step = FileReconciliation(file_path=file_path)

        candidates = build_maybe_todos(
            self.base_dir,
            [result],
            self.todo_config,
            self.engine,
            created=self.ledger.today(),
        )
        options = self.options_for(file_path)

        if self.ledger.storage_exists() and (self.update_todo or self.should_clean_todos):
            self.check_severities(self.ledger.generate_todo_batches(candidates, options).stable)

        if self.update_todo:
            added, removed = self.ledger.write_todos(candidates, options)
            step.tally = step.tally + TodoTally(added=added, removed=removed)

        if not self.ledger.storage_exists():
            return step

        batches = self.ledger.generate_todo_batches(candidates, options)
        step.batches = batches

        stale = batches.remove | batches.expired
        if stale:
            if self.should_clean_todos:
                self.ledger.apply_todo_changes(set(), stale)
                step.tally = step.tally + TodoTally(removed=len(stale))
            else:
                step.violations = [
                    build_invalid_todo_violation(record)
                    for record in sorted(
                        batches.remove,
                        key=lambda r: (r.range.start_line, r.range.start_column, r.rule_id),
                    )
                ]

        step.demoted = update_results(results, batches.stable, self.base_dir, self.ledger.get_severity)
        return step

    def run(self, results: List[Result]) -> ReconciliationOutcome:
        """
        Reconcile every result in input order.

        Results appended during the pass (for violations in files without a
        result) are not themselves reconciled.
        """
        outcome = ReconciliationOutcome()
        for result in list(results):
            if not result.source:
                logger.debug("Skipping result without a source path")
                continue

            step = self.reconcile_file(results, result)
            merge_violations(results, self.base_dir, step.file_path, step.violations)
            outcome = outcome.merge(step)

            logger.debug(
                "%s: +%d -%d todos, %d demoted, %d violations",
                step.file_path, step.tally.added, step.tally.removed,
                step.demoted, len(step.violations),
            )
        return outcome
