"""
Severity mapping -- Ledger severity codes to diagnostic severities

The ledger reports how far a todo has decayed as an integer code:

    -1  still inside its todo window       -> todo
     0  never decays                       -> off
     1  warn window has passed             -> warning
     2  error window has passed            -> error

Any other code is fatal. A diagnostic is never silently given a default.
"""

from enum import IntEnum

from .diagnostics import Severity
from ..exceptions import UnknownSeverityError


class SeverityCode(IntEnum):
    TODO = -1
    OFF = 0
    WARNING = 1
    ERROR = 2


SEVERITY_FOR_CODE = {
    SeverityCode.TODO: Severity.TODO,
    SeverityCode.OFF: Severity.OFF,
    SeverityCode.WARNING: Severity.WARNING,
    SeverityCode.ERROR: Severity.ERROR,
}


def map_severity(code: int) -> Severity:
    """
    Translate a ledger severity code into a diagnostic severity.

    Args:
        code: Integer code returned by the ledger's get_severity()

    Returns:
        The matching Severity

    Raises:
        UnknownSeverityError: If code is not a legal ledger code
    """
    if isinstance(code, bool):
        raise UnknownSeverityError(code)
    try:
        return SEVERITY_FOR_CODE[SeverityCode(code)]
    except (ValueError, TypeError):
        raise UnknownSeverityError(code) from None
