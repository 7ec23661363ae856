"""
Diagnostics -- Lint results as produced by the upstream linter

Mirrors the stylelint JSON report shape:

    [{"source": "/abs/path/a.css",
      "warnings": [{"line": 2, "column": 3, "endLine": 2, "endColumn": 9,
                    "rule": "color-no-hex", "severity": "error",
                    "text": "Unexpected hex color (color-no-hex)"}],
      "deprecations": [...], "invalidOptionWarnings": [...],
      "parseErrors": [...], "errored": true}]

Results are mutable in place: reconciliation demotes severities and appends
synthetic violations, then recomputes `errored`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, Iterable

from ..exceptions import UnknownSeverityError


class Severity(Enum):
    """Closed set of diagnostic severities."""
    TODO = "todo"
    OFF = "off"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """
        Parse a severity string from a report.

        Raises:
            UnknownSeverityError: If value is not one of the four severities
        """
        try:
            return cls(value)
        except ValueError:
            raise UnknownSeverityError(value) from None


@dataclass
class Diagnostic:
    """One issue found at a location in a source file."""
    line: int
    column: int
    text: str
    severity: Severity = Severity.ERROR
    rule: Optional[str] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    @property
    def has_position(self) -> bool:
        return bool(self.line)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "line": self.line,
            "column": self.column,
            "rule": self.rule,
            "severity": self.severity.value,
            "text": self.text,
        }
        if self.end_line is not None:
            d["endLine"] = self.end_line
        if self.end_column is not None:
            d["endColumn"] = self.end_column
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Diagnostic":
        return cls(
            line=d.get("line") or 0,
            column=d.get("column") or 0,
            text=d.get("text", ""),
            severity=Severity.parse(d.get("severity", "error")),
            rule=d.get("rule"),
            end_line=d.get("endLine"),
            end_column=d.get("endColumn"),
        )


@dataclass
class DeprecationNotice:
    text: str
    reference: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = {"text": self.text}
        if self.reference:
            d["reference"] = self.reference
        return d


@dataclass
class InvalidOptionNotice:
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text}


@dataclass
class ParseErrorNotice:
    """A file-level parse failure reported by the linter."""
    line: int
    column: int
    text: str
    classifier: str = "CssSyntaxError"

    def to_diagnostic(self) -> Diagnostic:
        """Convert to a synthetic error diagnostic for counting and display."""
        return Diagnostic(
            line=self.line,
            column=self.column,
            rule=self.classifier,
            severity=Severity.ERROR,
            text=f"{self.text} ({self.classifier})",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "stylelintType": self.classifier,
            "text": self.text,
        }


@dataclass
class Result:
    """
    All diagnostics for one source file in one run.

    `errored` is derived: it must equal "contains an error-severity
    diagnostic" and is refreshed by update_errored() after any mutation.
    """
    source: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    deprecations: List[DeprecationNotice] = field(default_factory=list)
    invalid_option_warnings: List[InvalidOptionNotice] = field(default_factory=list)
    parse_errors: List[ParseErrorNotice] = field(default_factory=list)
    errored: Optional[bool] = None
    ignored: bool = False

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    def update_errored(self) -> bool:
        """Recompute and return the errored flag."""
        self.errored = self.has_errors()
        return self.errored

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "warnings": [d.to_dict() for d in self.diagnostics],
            "deprecations": [n.to_dict() for n in self.deprecations],
            "invalidOptionWarnings": [n.to_dict() for n in self.invalid_option_warnings],
            "parseErrors": [n.to_dict() for n in self.parse_errors],
            "errored": bool(self.errored),
            "ignored": self.ignored,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Result":
        return cls(
            source=d.get("source"),
            diagnostics=[Diagnostic.from_dict(w) for w in d.get("warnings") or []],
            deprecations=[
                DeprecationNotice(text=n.get("text", ""), reference=n.get("reference"))
                for n in d.get("deprecations") or []
            ],
            invalid_option_warnings=[
                InvalidOptionNotice(text=n.get("text", ""))
                for n in d.get("invalidOptionWarnings") or []
            ],
            parse_errors=[
                ParseErrorNotice(
                    line=n.get("line") or 0,
                    column=n.get("column") or 0,
                    text=n.get("text", ""),
                    classifier=n.get("stylelintType", "CssSyntaxError"),
                )
                for n in d.get("parseErrors") or []
            ],
            errored=d.get("errored"),
            ignored=bool(d.get("ignored", False)),
        )


@dataclass
class LinterReturn:
    """Caller-visible return value; `errored` drives the exit code."""
    errored: bool = False
    cwd: Optional[str] = None


def results_from_data(data: Any) -> List[Result]:
    """
    Build Results from a decoded stylelint report.

    Accepts either the bare results list or the `{"results": [...]}`
    envelope returned by stylelint's Node API.
    """
    if isinstance(data, dict):
        data = data.get("results", [])
    if not isinstance(data, list):
        raise ValueError("Expected a list of lint results")
    return [Result.from_dict(item) for item in data]


def count_by_severity(diagnostics: Iterable[Diagnostic]) -> Dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for diagnostic in diagnostics:
        counts[diagnostic.severity] += 1
    return counts
