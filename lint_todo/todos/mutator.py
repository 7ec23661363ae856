"""
Diagnostic mutation -- Applying ledger decisions to lint results

Three operations touch results in place:
  - update_results(): demote diagnostics matched by stable records
  - merge_violations(): add synthetic invalid-todo violations to a file
  - update_errored_state(): re-derive every `errored` flag
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..core.diagnostics import Diagnostic, LinterReturn, Result, Severity
from ..core.severity import map_severity
from ..ledger.records import TodoRecord, relative_path


INVALID_TODO_RULE = "invalid-todo-violation-rule"


def build_invalid_todo_violation(record: TodoRecord) -> Diagnostic:
    """
    Violation for a recorded todo whose error no longer reproduces.

    Placed at (0, 0) so it sorts ahead of positioned diagnostics.
    """
    return Diagnostic(
        line=0,
        column=0,
        rule=INVALID_TODO_RULE,
        severity=Severity.ERROR,
        text=(
            f"Todo violation passes `{record.rule_id}` rule. Please run with "
            "`CLEAN_TODO=1` env var to remove this todo from the todo list."
        ),
    )


def find_result(results: Iterable[Result], base_dir, file_path: str) -> Optional[Result]:
    """Result whose source resolves to `file_path` relative to `base_dir`."""
    for result in results:
        if result.source and relative_path(base_dir, result.source) == file_path:
            return result
    return None


def update_results(
    results: List[Result],
    stable: Iterable[TodoRecord],
    base_dir,
    get_severity: Callable[[TodoRecord], int]
) -> int:
    """
    Demote every diagnostic still covered by a stable record.

    The live diagnostic is found by identity with the record's original
    diagnostic. Records whose decay resolves to error leave the diagnostic
    untouched. Records with no matching result or diagnostic are skipped.

    Args:
        results: Lint results, mutated in place
        stable: Records still reproduced by the current run
        base_dir: Directory record paths are relative to
        get_severity: Ledger severity lookup returning a severity code

    Returns:
        Number of diagnostics whose severity changed
    """
    changed = 0
    for record in stable:
        severity = map_severity(get_severity(record))
        if severity == Severity.ERROR:
            continue

        result = find_result(results, base_dir, record.file_path)
        if result is None:
            continue

        diagnostic = next(
            (d for d in result.diagnostics if d is record.original_diagnostic),
            None,
        )
        if diagnostic is None:
            continue

        diagnostic.severity = severity
        changed += 1
    return changed


def merge_violations(
    results: List[Result],
    base_dir,
    file_path: str,
    violations: List[Diagnostic]
) -> Optional[Result]:
    """
    Append violations to the file's result, creating the result if needed.

    Returns:
        The result that received the violations, or None when there were none
    """
    if not violations:
        return None

    result = find_result(results, base_dir, file_path)
    if result is None:
        result = Result(source=str(Path(base_dir) / file_path))
        results.append(result)

    result.diagnostics.extend(violations)
    return result


def update_errored_state(results: Iterable[Result], linter_return: Optional[LinterReturn] = None) -> bool:
    """
    Recompute `errored` on every result and on the linter return value.

    Demotions can clear errors and violations can add them, so the flags
    the linter computed are stale after reconciliation.

    Returns:
        True if any result still holds an error
    """
    errored = False
    for result in results:
        errored = result.update_errored() or errored

    if linter_return is not None:
        linter_return.errored = errored
    return errored
