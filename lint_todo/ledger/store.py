"""
TodoLedger -- Append-only todo storage file

Records live in a single `.lint-todo` file in the base directory, one
operation per line:

    {"op": "add", "todo": {...}}
    {"op": "remove", "todo": {...}}

The live record set is the replay of all operations. Lines are never
rewritten except by compact(), which drops superseded operations.
Matching is by exact identity key; edits that move an issue produce a
remove plus an add.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Optional, Set, Tuple

import orjson

from .base import BaseLedger, TodoBatches, WriteTodoOptions
from .config import ConfigValidation, TodoConfig, get_todo_config, validate_config
from .records import TodoRecord
from ..core.severity import SeverityCode
from ..exceptions import LedgerCorruptError


logger = logging.getLogger(__name__)

STORAGE_FILE = ".lint-todo"
OPERATIONS = ("add", "remove")


class TodoLedger(BaseLedger):
    """
    File-backed ledger.

    Args:
        base_dir: Directory holding the storage file and todo config
        today: Fixed "today" for decay decisions (default: date.today())
    """

    def __init__(self, base_dir, today: Optional[date] = None):
        super().__init__(base_dir)
        self.path = self.base_dir / STORAGE_FILE
        self._today = today

    def today(self) -> date:
        return self._today or date.today()

    # =========================================================================
    # Configuration
    # =========================================================================

    def validate_config(self) -> ConfigValidation:
        return validate_config(self.base_dir)

    def get_todo_config(
        self,
        engine: str,
        days_to_warn: Optional[str] = None,
        days_to_error: Optional[str] = None
    ) -> TodoConfig:
        return get_todo_config(self.base_dir, engine, days_to_warn, days_to_error)

    # =========================================================================
    # Reading
    # =========================================================================

    def storage_exists(self) -> bool:
        return self.path.exists()

    def _read_operations(self) -> List[Tuple[str, TodoRecord]]:
        operations = []
        if not self.path.exists():
            return operations
        with open(self.path, "rb") as f:
            for number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = orjson.loads(line)
                    op = entry["op"]
                    record = TodoRecord.from_dict(entry["todo"])
                except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    raise LedgerCorruptError(self.path, number) from e
                if op not in OPERATIONS:
                    raise LedgerCorruptError(self.path, number)
                operations.append((op, record))
        return operations

    def read_all(self) -> Dict[str, TodoRecord]:
        """Replay the storage file into the live record set, keyed by identity."""
        return _replay(self._read_operations())

    def read_for_file(self, file_path: str) -> Dict[str, TodoRecord]:
        """Live records for one relative path ("" = every record)."""
        return {
            key: record for key, record in self.read_all().items()
            if not file_path or record.file_path == file_path
        }

    # =========================================================================
    # Writing
    # =========================================================================

    def _append(self, operations: Iterable[Tuple[str, TodoRecord]]) -> int:
        lines = [
            orjson.dumps({"op": op, "todo": record.to_dict()}) + b"\n"
            for op, record in operations
        ]
        if not lines:
            return 0
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "ab") as f:
            f.writelines(lines)
        return len(lines)

    def _stamp(self, record: TodoRecord, todo_config: Optional[TodoConfig]) -> TodoRecord:
        """Give a new record its created / decay dates if it has none."""
        if record.created_date is not None:
            return record
        created = self.today()
        days = (todo_config or TodoConfig()).days_for_rule(record.rule_id)
        return replace(
            record,
            created_date=created,
            warn_date=days.warn_date(created),
            error_date=days.error_date(created),
        )

    def apply_todo_changes(self, to_add: Set[TodoRecord], to_remove: Set[TodoRecord]) -> None:
        operations = [("add", r) for r in _ordered(to_add)]
        operations += [("remove", r) for r in _ordered(to_remove)]
        written = self._append(operations)
        logger.debug("Applied %d todo operations to %s", written, self.path)

    def write_todos(self, candidates: Set[TodoRecord], options: WriteTodoOptions) -> Tuple[int, int]:
        batches = self.generate_todo_batches(candidates, options)
        to_add = {self._stamp(r, options.todo_config) for r in batches.add}
        self.apply_todo_changes(to_add, batches.remove)
        return len(batches.add), len(batches.remove)

    def compact(self) -> int:
        """
        Rewrite the storage file with only live records.

        The whole file is decoded before it is rewritten, so a corrupt
        line aborts without touching the file.

        Returns:
            Number of storage lines dropped

        Raises:
            LedgerCorruptError: If any line cannot be decoded
        """
        if not self.path.exists():
            return 0
        operations = self._read_operations()
        live = _replay(operations)
        lines = [
            orjson.dumps({"op": "add", "todo": record.to_dict()}) + b"\n"
            for record in _ordered(live.values())
        ]
        with open(self.path, "wb") as f:
            f.writelines(lines)
        return len(operations) - len(lines)

    # =========================================================================
    # Reconciliation
    # =========================================================================

    def generate_todo_batches(self, candidates: Set[TodoRecord], options: WriteTodoOptions) -> TodoBatches:
        existing = self.read_for_file(options.file_path)
        today = self.today()
        batches = TodoBatches()
        matched = set()

        for candidate in candidates:
            record = existing.get(candidate.key)
            if record is None:
                batches.add.add(candidate)
                continue
            matched.add(candidate.key)
            live = record.with_diagnostic(candidate.original_diagnostic)
            if record.is_expired(today):
                batches.expired.add(live)
            else:
                batches.stable.add(live)

        for key, record in existing.items():
            if key not in matched and options.should_remove(record):
                batches.remove.add(record)

        return batches

    def get_severity(self, record: TodoRecord) -> SeverityCode:
        today = self.today()
        if record.error_date is not None and today >= record.error_date:
            return SeverityCode.ERROR
        if record.warn_date is not None and today >= record.warn_date:
            return SeverityCode.WARNING
        return SeverityCode.TODO


def _ordered(records: Iterable[TodoRecord]) -> List[TodoRecord]:
    return sorted(
        records,
        key=lambda r: (r.file_path, r.range.start_line, r.range.start_column, r.rule_id, r.key),
    )


def _replay(operations: Iterable[Tuple[str, TodoRecord]]) -> Dict[str, TodoRecord]:
    records: Dict[str, TodoRecord] = {}
    for op, record in operations:
        if op == "add":
            records[record.key] = record
        else:
            records.pop(record.key, None)
    return records
