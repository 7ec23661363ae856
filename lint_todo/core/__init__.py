"""Core data model: diagnostics, results and severity mapping."""

from .diagnostics import (
    Severity,
    Diagnostic,
    DeprecationNotice,
    InvalidOptionNotice,
    ParseErrorNotice,
    Result,
    LinterReturn,
    results_from_data,
)
from .severity import SeverityCode, map_severity

__all__ = [
    'Severity', 'Diagnostic', 'DeprecationNotice', 'InvalidOptionNotice',
    'ParseErrorNotice', 'Result', 'LinterReturn', 'results_from_data',
    'SeverityCode', 'map_severity',
]
