"""
Todo records -- Ledger entries and their identity

A TodoRecord is keyed by (engine, file path, rule id, range, source snippet).
Dates and the originating diagnostic ride along but never take part in
equality, so a candidate built today equals the record stored last month.
"""

import os
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Optional, List, Dict, Any, TYPE_CHECKING

import xxhash

if TYPE_CHECKING:
    from ..core.diagnostics import Diagnostic


@dataclass(frozen=True)
class TodoRange:
    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": {"line": self.start_line, "column": self.start_column},
            "end": {"line": self.end_line, "column": self.end_column},
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TodoRange":
        return cls(
            start_line=d["start"]["line"],
            start_column=d["start"]["column"],
            end_line=d["end"]["line"],
            end_column=d["end"]["column"],
        )


def build_range(
    line: int,
    column: int,
    end_line: Optional[int] = None,
    end_column: Optional[int] = None
) -> TodoRange:
    """Build a range, defaulting a missing end to the start position."""
    return TodoRange(
        start_line=line,
        start_column=column,
        end_line=end_line if end_line is not None else line,
        end_column=end_column if end_column is not None else column,
    )


def relative_path(base_dir, path: Optional[str]) -> str:
    """Path of `path` relative to `base_dir`, with POSIX separators."""
    if not path:
        return ""
    return Path(os.path.relpath(path, base_dir)).as_posix()


def read_source(path: Optional[str]) -> List[str]:
    """Read a source file as lines. Missing or unreadable files yield no lines."""
    if not path or path.startswith("<"):
        return []
    try:
        return Path(path).read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        return []


def source_for_range(lines: List[str], todo_range: TodoRange) -> str:
    """
    Extract the text covered by a 1-based line/column range.

    A range whose end equals its start covers no characters.
    """
    if not lines:
        return ""

    first, last = todo_range.start_line - 1, todo_range.end_line - 1
    first_col, last_col = todo_range.start_column - 1, todo_range.end_column - 1
    if first < 0 or first >= len(lines):
        return ""

    parts = []
    for index in range(first, min(last, len(lines) - 1) + 1):
        line = lines[index]
        if index == first and first == last:
            parts.append(line[max(first_col, 0):max(last_col, 0)])
        elif index == first:
            parts.append(line[max(first_col, 0):])
        elif index == last:
            parts.append(line[:max(last_col, 0)])
        else:
            parts.append(line)
    return "\n".join(parts)


@dataclass(frozen=True)
class TodoRecord:
    """One persisted todo, or a candidate for one."""
    engine: str
    file_path: str
    rule_id: str
    range: TodoRange
    source: str = ""
    created_date: Optional[date] = field(default=None, compare=False)
    warn_date: Optional[date] = field(default=None, compare=False)
    error_date: Optional[date] = field(default=None, compare=False)
    original_diagnostic: Optional["Diagnostic"] = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> str:
        """Stable identity hash used as the storage key."""
        r = self.range
        content = "\x1f".join([
            self.engine,
            self.file_path,
            self.rule_id,
            f"{r.start_line}:{r.start_column}-{r.end_line}:{r.end_column}",
            self.source,
        ])
        return xxhash.xxh64(content.encode("utf-8")).hexdigest()

    def with_diagnostic(self, diagnostic: Optional["Diagnostic"]) -> "TodoRecord":
        """Copy of this record carrying a live diagnostic."""
        return replace(self, original_diagnostic=diagnostic)

    def is_expired(self, today: date) -> bool:
        return self.error_date is not None and today >= self.error_date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "engine": self.engine,
            "filePath": self.file_path,
            "ruleId": self.rule_id,
            "range": self.range.to_dict(),
            "source": self.source,
            "createdDate": _iso(self.created_date),
            "warnDate": _iso(self.warn_date),
            "errorDate": _iso(self.error_date),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TodoRecord":
        return cls(
            engine=d["engine"],
            file_path=d["filePath"],
            rule_id=d.get("ruleId", ""),
            range=TodoRange.from_dict(d["range"]),
            source=d.get("source", ""),
            created_date=_parse_date(d.get("createdDate")),
            warn_date=_parse_date(d.get("warnDate")),
            error_date=_parse_date(d.get("errorDate")),
        )


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None
