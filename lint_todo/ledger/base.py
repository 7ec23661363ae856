"""
BaseLedger -- Interface of the persisted todo ledger

The reconciliation engine only talks to the ledger through this interface.
Storage format, record matching and decay date math are the ledger's
business.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Set, Tuple

from .config import ConfigValidation, TodoConfig
from .records import TodoRecord
from ..core.severity import SeverityCode


@dataclass
class WriteTodoOptions:
    """
    Scope of a write / batch operation.

    Attributes:
        engine: Engine whose records are being reconciled
        file_path: Restrict existing records to this relative path ("" = all)
        todo_config: Decay configuration used for new records
        should_remove: Predicate deciding which unmatched records may be removed
    """
    engine: str
    file_path: str = ""
    todo_config: Optional[TodoConfig] = None
    should_remove: Optional[Callable[[TodoRecord], bool]] = None

    def __post_init__(self):
        if self.should_remove is None:
            engine = self.engine
            self.should_remove = lambda record: record.engine == engine


@dataclass
class TodoBatches:
    """Classification of candidates against existing records."""
    add: Set[TodoRecord] = field(default_factory=set)
    remove: Set[TodoRecord] = field(default_factory=set)
    stable: Set[TodoRecord] = field(default_factory=set)
    expired: Set[TodoRecord] = field(default_factory=set)


class BaseLedger(ABC):
    """
    Abstract todo ledger bound to a base directory.

    Subclasses persist records however they like; the formatter relies
    only on the methods below.
    """

    def __init__(self, base_dir):
        self.base_dir = Path(base_dir)

    def today(self) -> date:
        """Date used for decay decisions and new record stamps."""
        return date.today()

    @abstractmethod
    def validate_config(self) -> ConfigValidation:
        """Check the todo configuration sources for contradictions."""

    @abstractmethod
    def get_todo_config(
        self,
        engine: str,
        days_to_warn: Optional[str] = None,
        days_to_error: Optional[str] = None
    ) -> TodoConfig:
        """Load the decay configuration for an engine, applying day overrides."""

    @abstractmethod
    def storage_exists(self) -> bool:
        """True if the ledger has been written at least once."""

    @abstractmethod
    def write_todos(self, candidates: Set[TodoRecord], options: WriteTodoOptions) -> Tuple[int, int]:
        """Persist new candidates and drop stale records. Returns (added, removed)."""

    @abstractmethod
    def generate_todo_batches(self, candidates: Set[TodoRecord], options: WriteTodoOptions) -> TodoBatches:
        """Classify candidates into add / remove / stable / expired batches."""

    @abstractmethod
    def apply_todo_changes(self, to_add: Set[TodoRecord], to_remove: Set[TodoRecord]) -> None:
        """Add and remove records."""

    @abstractmethod
    def compact(self) -> int:
        """Drop superseded storage entries. Returns how many were dropped."""

    @abstractmethod
    def get_severity(self, record: TodoRecord) -> SeverityCode:
        """Current decay state of a record."""
